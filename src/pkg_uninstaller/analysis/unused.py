"""
Unused set builder and the immutable analysis result.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Set, Tuple

from ..errors import LookupWarning, ParseError
from .transitive import Justification
from .usage import UsageSummary


def build_unused(declared: Iterable[str], used: Set[str],
                 is_justified: Callable[[str], bool]) -> List[str]:
    """
    Declared dependencies that are neither used directly nor justified.

    ``is_justified`` is only consulted for dependencies with no direct use.
    Declaration order is preserved.
    """
    return [name for name in declared if name not in used and not is_justified(name)]


@dataclass(frozen=True)
class AnalysisResult:
    """Partition of the analysed dependencies plus diagnostics."""

    directly_used: Tuple[str, ...]
    transitively_justified: Tuple[str, ...]
    unused: Tuple[str, ...]
    usage: Mapping[str, UsageSummary] = field(default_factory=lambda: MappingProxyType({}))
    justifications: Mapping[str, Justification] = field(default_factory=lambda: MappingProxyType({}))
    parse_errors: Tuple[ParseError, ...] = ()
    lookup_warnings: Tuple[LookupWarning, ...] = ()

    @property
    def analysed(self) -> Tuple[str, ...]:
        return self.directly_used + self.transitively_justified + self.unused

    def trace(self) -> List[str]:
        """Human-readable justification lines, one per justified dependency."""
        return [self.justifications[name].describe() for name in self.transitively_justified]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unused": list(self.unused),
            "directly_used": {
                name: {"count": self.usage[name].count, "files": list(self.usage[name].files)}
                for name in self.directly_used
            },
            "transitively_justified": {
                name: self.justifications[name].describe() for name in self.transitively_justified
            },
            "parse_errors": [str(error) for error in self.parse_errors],
            "lookup_warnings": [str(warning) for warning in self.lookup_warnings],
        }
