"""
Matching module specifiers against declared dependency names.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..parsing.models import ImportReference

logger = logging.getLogger(__name__)


@dataclass
class UsageRecord:
    """References to one dependency collected during a scan."""

    name: str
    count: int = 0
    files: List[str] = field(default_factory=list)

    def add(self, file_path: str) -> None:
        self.count += 1
        if file_path not in self.files:
            self.files.append(file_path)

    def freeze(self) -> "UsageSummary":
        return UsageSummary(self.name, self.count, tuple(self.files))


@dataclass(frozen=True)
class UsageSummary:
    """Read-only snapshot of a UsageRecord."""

    name: str
    count: int
    files: Tuple[str, ...]


def candidate_roots(specifier: str) -> List[str]:
    """
    Package roots a specifier could refer to, shortest first.

    The first segment is the atomic root; for scoped specifiers that is the
    ``@scope/name`` pair. Each further path segment extends the candidate.

    >>> candidate_roots("lodash/fp/map")
    ['lodash', 'lodash/fp', 'lodash/fp/map']
    >>> candidate_roots("@babel/core/lib")
    ['@babel/core', '@babel/core/lib']
    """
    if not specifier or specifier.startswith(('.', '/')) or specifier.startswith('node:'):
        return []

    parts = specifier.split('/')
    atomic = 2 if specifier.startswith('@') else 1
    if len(parts) < atomic or not all(parts[:atomic]):
        return []
    return ['/'.join(parts[:i]) for i in range(atomic, len(parts) + 1)]


def match_dependency(specifier: str, declared: Set[str]) -> Optional[str]:
    """
    Resolve a specifier to at most one declared dependency.

    A specifier matches a name if it equals the name or continues it with
    a '/'. The longest declared match wins.
    """
    for root in reversed(candidate_roots(specifier)):
        if root in declared:
            return root
    return None


class UsageMatcher:
    """Accumulates direct usage of declared dependencies."""

    def __init__(self, declared: Iterable[str], verbose: bool = False,
                 log: Optional[logging.Logger] = None):
        self.declared = set(declared)
        self.verbose = verbose
        self.log = log or logger
        self.records: Dict[str, UsageRecord] = {}

    def add(self, reference: ImportReference) -> Optional[str]:
        """Record one reference; returns the matched dependency, if any."""
        name = match_dependency(reference.specifier, self.declared)
        if name is None:
            return None

        record = self.records.get(name)
        if record is None:
            record = self.records[name] = UsageRecord(name)
        record.add(reference.file_path)

        if self.verbose:
            self.log.info("%s used in %s:%d via '%s'", name, reference.file_path,
                          reference.line, reference.specifier)
        return name

    def add_all(self, references: Iterable[ImportReference]) -> 'UsageMatcher':
        for reference in references:
            self.add(reference)
        return self

    @property
    def used(self) -> Set[str]:
        return set(self.records)

    def count(self, name: str) -> int:
        record = self.records.get(name)
        return record.count if record else 0

    def files(self, name: str) -> List[str]:
        record = self.records.get(name)
        return list(record.files) if record else []
