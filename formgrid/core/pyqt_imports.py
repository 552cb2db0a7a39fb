"""Module: pyqt_imports.py

Date: 2026-10-19

Single import point for the PyQt5 classes used by formgrid.
"""

from PyQt5.QtCore import QCoreApplication, QObject, QTimer, pyqtSignal

__all__ = [
    "QCoreApplication",
    "QObject",
    "QTimer",
    "pyqtSignal",
]
