"""
Import extraction strategies for JavaScript, TypeScript and markup files.
"""

from .base_strategy import ParsingStrategy, TreeSitterParsingStrategy
from .extractor import ImportExtractor
from .models import ImportReference, NodeKind
from .strategy_factory import StrategyFactory

__all__ = [
    'ImportExtractor',
    'ImportReference',
    'NodeKind',
    'ParsingStrategy',
    'StrategyFactory',
    'TreeSitterParsingStrategy',
]
