"""
rename_gui - PySide6 Interface for Batch Regex Rename
"""

from .gui_entry import main

__all__ = ["main"]
