"""
gui - PySide6 front-end for Asset CodeGen
"""

from .gui_entry import main

__all__ = ["main"]
