"""Utility package for formgrid: logging, paths, timers and JSON persistence."""
