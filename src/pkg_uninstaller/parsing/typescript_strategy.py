"""
TypeScript import extraction using tree-sitter.
"""

from typing import List

import tree_sitter
from tree_sitter_typescript import language_tsx, language_typescript

from .base_strategy import TreeSitterParsingStrategy


class TypeScriptParsingStrategy(TreeSitterParsingStrategy):
    """TypeScript import extraction; ``tsx=True`` selects the TSX grammar."""

    def __init__(self, tsx: bool = False):
        self.tsx = tsx
        grammar = language_tsx() if tsx else language_typescript()
        super().__init__(tree_sitter.Language(grammar))

    def get_language_name(self) -> str:
        return "tsx" if self.tsx else "typescript"

    def get_supported_extensions(self) -> List[str]:
        if self.tsx:
            return ['.tsx']
        return ['.ts', '.mts', '.cts']
