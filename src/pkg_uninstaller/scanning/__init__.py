"""
Source tree scanning.
"""

from .scanner import SourceScanner

__all__ = ["SourceScanner"]
