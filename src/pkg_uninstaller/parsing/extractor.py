"""
Per-file import extraction with parse-failure recovery.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..errors import ParseError
from .models import ImportReference
from .strategy_factory import StrategyFactory

logger = logging.getLogger(__name__)


class ImportExtractor:
    """
    Reads source files and extracts their module specifiers.

    Each file is handled independently. A file that fails to read, decode or
    parse is recorded in ``diagnostics`` and contributes no references.
    """

    def __init__(self, factory: Optional[StrategyFactory] = None,
                 log: Optional[logging.Logger] = None):
        self.factory = factory or StrategyFactory()
        self.log = log or logger
        self.diagnostics: List[ParseError] = []

    def extract_file(self, file_path: Path) -> List[ImportReference]:
        """
        Extract references from one file.

        Raises:
            ParseError: If the file cannot be read, decoded or parsed
        """
        strategy = self.factory.get_strategy(file_path.suffix)
        if strategy is None:
            raise ParseError(str(file_path), f"no parser for extension '{file_path.suffix}'")

        try:
            content = file_path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(str(file_path), f"cannot decode as UTF-8: {e}") from e
        except OSError as e:
            raise ParseError(str(file_path), f"cannot read file: {e}") from e

        return strategy.extract_imports(str(file_path), content)

    def extract_all(self, files: Iterable[Path]) -> Iterator[ImportReference]:
        """Yield references from every file, skipping files that fail to parse."""
        for file_path in files:
            try:
                references = self.extract_file(file_path)
            except ParseError as e:
                self.diagnostics.append(e)
                self.log.warning("Skipping unparsable file %s", e)
                continue

            self.log.debug("Found %d module reference(s) in %s", len(references), file_path)
            yield from references
