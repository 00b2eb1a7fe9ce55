"""
pkg-uninstaller: find and remove Node.js dependencies a project no longer uses.
"""

__version__ = "1.0.0"
