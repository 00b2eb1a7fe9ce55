"""
Source scanner for dependency analysis.

Walks the project directory and returns the files the import extractor
should read, pruning installed dependencies and build output.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from ..constants import GITIGNORE_FILE, MANIFEST_FILE
from ..errors import PreconditionError
from ..utils.file_filter import FileFilter

logger = logging.getLogger(__name__)


class SourceScanner:
    """Enumerates candidate source files under a project root."""

    def __init__(self, base_path: str, additional_excludes: Optional[Iterable[str]] = None,
                 respect_gitignore: bool = True, log: Optional[logging.Logger] = None):
        self.base_path = Path(base_path).resolve()
        self.log = log or logger
        self.file_filter = self._build_filter(additional_excludes, respect_gitignore)

    def _build_filter(self, additional_excludes, respect_gitignore: bool) -> FileFilter:
        gitignore_path = self.base_path / GITIGNORE_FILE
        if respect_gitignore and gitignore_path.is_file():
            try:
                return FileFilter.from_gitignore(gitignore_path, additional_excludes)
            except (OSError, UnicodeDecodeError) as e:
                self.log.warning("Ignoring unreadable %s: %s", gitignore_path, e)
        return FileFilter(additional_excludes)

    def scan(self) -> List[Path]:
        """
        Discover source files.

        Returns:
            Sorted list of absolute file paths

        Raises:
            PreconditionError: If the root manifest does not exist
        """
        manifest_path = self.base_path / MANIFEST_FILE
        if not manifest_path.is_file():
            raise PreconditionError(f"No {MANIFEST_FILE} found in {self.base_path}")

        files = []
        for root, dirs, filenames in os.walk(self.base_path):
            rel_root = os.path.relpath(root, self.base_path).replace('\\', '/')
            rel_root = '' if rel_root == '.' else rel_root + '/'

            dirs[:] = sorted(
                d for d in dirs
                if not self.file_filter.should_exclude_directory(d, rel_root + d)
            )

            for filename in sorted(filenames):
                file_path = Path(root) / filename
                if not self.file_filter.should_exclude_file(file_path, rel_root + filename):
                    files.append(file_path)

        self.log.debug("Scanned %s: %d candidate source file(s)", self.base_path, len(files))
        return sorted(files)
