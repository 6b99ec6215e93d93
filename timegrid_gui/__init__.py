"""
Timegrid GUI Module

PySide6-based graphical interface for the week grid.
"""

from .main_window import MainWindow

__all__ = ['MainWindow']
