"""
Utility helpers shared across the scanner and analysis components.
"""

from .file_filter import FileFilter

__all__ = ["FileFilter"]
