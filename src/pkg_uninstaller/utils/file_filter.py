"""
Centralized file filtering logic for the source scanner.

Decides which directories are walked and which files are handed to the
import extractor.
"""

import fnmatch
from pathlib import Path
from typing import Iterable, Optional

import pathspec

from ..constants import FILTER_CONFIG


class FileFilter:
    """Centralized file filtering logic."""

    def __init__(self, additional_excludes: Optional[Iterable[str]] = None,
                 ignore_spec: Optional[pathspec.PathSpec] = None):
        """
        Initialize the file filter.

        Args:
            additional_excludes: Additional directory names to exclude
            ignore_spec: Compiled .gitignore patterns, matched against paths
                relative to the project root
        """
        self.exclude_dirs = set(FILTER_CONFIG["exclude_directories"])
        self.exclude_files = set(FILTER_CONFIG["exclude_files"])
        self.supported_extensions = set(FILTER_CONFIG["supported_extensions"])
        self.ignore_spec = ignore_spec

        if additional_excludes:
            self.exclude_dirs.update(additional_excludes)

    @classmethod
    def from_gitignore(cls, gitignore_path: Path,
                       additional_excludes: Optional[Iterable[str]] = None) -> 'FileFilter':
        """Build a filter that also honors the patterns in a .gitignore file."""
        with open(gitignore_path, 'r', encoding='utf-8') as f:
            spec = pathspec.PathSpec.from_lines('gitwildmatch', f)
        return cls(additional_excludes=additional_excludes, ignore_spec=spec)

    def should_exclude_directory(self, dir_name: str, relative_dir: Optional[str] = None) -> bool:
        """
        Check if a directory should be pruned from the walk.

        Args:
            dir_name: Directory name to check
            relative_dir: Directory path relative to the project root, used
                for .gitignore matching

        Returns:
            True if directory should be excluded, False otherwise
        """
        if dir_name in self.exclude_dirs:
            return True

        if self.ignore_spec is not None and relative_dir is not None:
            return self.ignore_spec.match_file(relative_dir.rstrip('/') + '/')

        return False

    def should_exclude_file(self, file_path: Path, relative_path: Optional[str] = None) -> bool:
        """
        Check if a file should be skipped.

        Args:
            file_path: Path object for the file to check
            relative_path: POSIX path relative to the project root

        Returns:
            True if file should be excluded, False otherwise
        """
        if not self.is_supported_file_type(file_path):
            return True

        for pattern in self.exclude_files:
            if fnmatch.fnmatch(file_path.name, pattern):
                return True

        if self.ignore_spec is not None and relative_path is not None:
            return self.ignore_spec.match_file(relative_path)

        return False

    def is_supported_file_type(self, file_path: Path) -> bool:
        """Check if the extension is one the import extractor understands."""
        return file_path.suffix.lower() in self.supported_extensions
