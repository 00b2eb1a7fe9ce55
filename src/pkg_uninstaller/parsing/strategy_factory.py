"""
Strategy factory mapping file extensions to import extraction strategies.
"""

from typing import Dict, List, Optional

from .base_strategy import ParsingStrategy
from .javascript_strategy import JavaScriptParsingStrategy
from .markup_strategy import MarkupParsingStrategy
from .typescript_strategy import TypeScriptParsingStrategy


class StrategyFactory:
    """Factory for creating appropriate parsing strategies."""

    def __init__(self):
        self._strategies: Dict[str, ParsingStrategy] = {}
        self._initialize_strategies()

    def _initialize_strategies(self):
        js_strategy = JavaScriptParsingStrategy()
        ts_strategy = TypeScriptParsingStrategy()
        tsx_strategy = TypeScriptParsingStrategy(tsx=True)
        markup_strategy = MarkupParsingStrategy(js_strategy, ts_strategy, tsx_strategy)

        for strategy in (js_strategy, ts_strategy, tsx_strategy, markup_strategy):
            for ext in strategy.get_supported_extensions():
                self._strategies[ext] = strategy

    def get_strategy(self, file_extension: str) -> Optional[ParsingStrategy]:
        """
        Get the strategy for a file extension.

        Args:
            file_extension: File extension (e.g., '.ts', '.vue')

        Returns:
            The matching strategy, or None if the extension is not handled
        """
        return self._strategies.get(file_extension.lower())

    def get_supported_extensions(self) -> List[str]:
        return list(self._strategies.keys())
