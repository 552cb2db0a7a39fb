"""Shared utilities package.

Timers and JSON configuration persistence.
"""
