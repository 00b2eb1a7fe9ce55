"""
JavaScript import extraction using tree-sitter.
"""

from typing import List

import tree_sitter
from tree_sitter_javascript import language

from .base_strategy import TreeSitterParsingStrategy


class JavaScriptParsingStrategy(TreeSitterParsingStrategy):
    """JavaScript (with JSX) import extraction."""

    def __init__(self):
        super().__init__(tree_sitter.Language(language()))

    def get_language_name(self) -> str:
        return "javascript"

    def get_supported_extensions(self) -> List[str]:
        return ['.js', '.jsx', '.mjs', '.cjs']
