"""
Model classes for the import extractor.
"""

from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    """Syntax node variants the extractor cares about."""

    IMPORT_DECLARATION = "import_declaration"
    CALL_EXPRESSION = "call_expression"
    STRING_LITERAL = "string_literal"
    OTHER = "other"


@dataclass(frozen=True)
class ImportReference:
    """A module specifier found in a source file."""

    specifier: str  # raw module specifier, e.g. "left-pad/util"
    file_path: str  # file that contains the reference
    line: int  # 1-based line of the import or call
