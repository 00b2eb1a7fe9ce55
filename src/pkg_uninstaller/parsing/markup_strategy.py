"""
Import extraction for markup files with embedded <script> blocks.

Vue single-file components and Svelte components keep their code in one or
more <script> elements. Each block is handed to the JavaScript or TypeScript
strategy according to its ``lang`` attribute.
"""

import re
from typing import List

from .base_strategy import ParsingStrategy
from .javascript_strategy import JavaScriptParsingStrategy
from .models import ImportReference
from .typescript_strategy import TypeScriptParsingStrategy

SCRIPT_BLOCK_RE = re.compile(
    r'<script\b((?:[^>"\']|"[^"]*"|\'[^\']*\')*)>(.*?)</script\s*>',
    re.DOTALL | re.IGNORECASE,
)
LANG_ATTR_RE = re.compile(r'\blang\s*=\s*["\']?([A-Za-z]+)', re.IGNORECASE)


class MarkupParsingStrategy(ParsingStrategy):
    """Extracts imports from the <script> blocks of .vue and .svelte files."""

    def __init__(self, javascript: JavaScriptParsingStrategy,
                 typescript: TypeScriptParsingStrategy,
                 tsx: TypeScriptParsingStrategy):
        self._javascript = javascript
        self._typescript = typescript
        self._tsx = tsx

    def get_language_name(self) -> str:
        return "markup"

    def get_supported_extensions(self) -> List[str]:
        return ['.vue', '.svelte']

    def extract_imports(self, file_path: str, content: str) -> List[ImportReference]:
        references = []
        for match in SCRIPT_BLOCK_RE.finditer(content):
            attributes, body = match.group(1), match.group(2)
            line_offset = content.count('\n', 0, match.start(2))
            strategy = self._strategy_for(attributes)
            references.extend(strategy.extract_imports(file_path, body, line_offset=line_offset))
        return references

    def _strategy_for(self, attributes: str):
        lang = LANG_ATTR_RE.search(attributes)
        if lang is None:
            return self._javascript
        value = lang.group(1).lower()
        if value == 'tsx':
            return self._tsx
        if value in ('ts', 'typescript'):
            return self._typescript
        return self._javascript
