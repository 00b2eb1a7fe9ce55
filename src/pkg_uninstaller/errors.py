"""
Error taxonomy for dependency analysis.

Only PreconditionError stops a run. ParseError and LookupWarning are
recovered per file and per dependency respectively.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base class for analysis failures."""


class PreconditionError(AnalysisError):
    """Raised when the root manifest is missing or unusable."""


class ParseError(AnalysisError):
    """Raised when a source file cannot be parsed into a usable syntax tree."""

    def __init__(self, file_path: str, message: str, line: Optional[int] = None):
        self.file_path = file_path
        self.line = line
        location = f"{file_path}:{line}" if line is not None else file_path
        super().__init__(f"{location}: {message}")


class LookupWarning(UserWarning):
    """A nested manifest was missing or unreadable during justification search."""

    def __init__(self, dependency: str, reason: str):
        self.dependency = dependency
        self.reason = reason
        super().__init__(f"{dependency}: {reason}")
