"""
Dependency analysis pipeline.

Scanner -> import extractor -> usage matcher gives the direct-usage set.
Every analysed dependency outside that set goes through transitive
resolution, and whatever is left is reported unused.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Optional

from ..config import AnalyzerSettings
from ..parsing.extractor import ImportExtractor
from ..parsing.strategy_factory import StrategyFactory
from ..scanning.scanner import SourceScanner
from .manifest import DependencySection, ManifestGraph, load_root_manifest
from .transitive import Justification, TransitiveResolver
from .unused import AnalysisResult, build_unused
from .usage import UsageMatcher

logger = logging.getLogger(__name__)


class DependencyAnalyzer:
    """Runs one analysis over a project root."""

    def __init__(self, settings: AnalyzerSettings, log: Optional[logging.Logger] = None,
                 factory: Optional[StrategyFactory] = None):
        self.settings = settings
        self.log = log or logger
        self.factory = factory

    def analyze(self) -> AnalysisResult:
        """
        Partition the analysed dependencies into used, justified and unused.

        Raises:
            PreconditionError: If the root manifest is missing or invalid
        """
        settings = self.settings
        project = load_root_manifest(settings.root, self.log)

        sections = [DependencySection.RUNTIME]
        if settings.include_dev:
            sections.append(DependencySection.DEV)
        analysed = project.declared_names(*sections)
        declared = project.all_dependencies()

        scanner = SourceScanner(
            str(settings.root),
            additional_excludes=settings.additional_excludes,
            respect_gitignore=settings.respect_gitignore,
            log=self.log,
        )
        files = scanner.scan()

        extractor = ImportExtractor(self.factory, log=self.log)
        matcher = UsageMatcher(declared, verbose=settings.verbose, log=self.log)
        matcher.add_all(extractor.extract_all(files))

        # One graph per run; never shared between analyses
        graph = ManifestGraph(settings.root, settings.modules_dir, log=self.log)
        resolver = TransitiveResolver(declared, graph, verbose=settings.verbose, log=self.log)
        justifications: Dict[str, Justification] = {}

        def is_justified(name: str) -> bool:
            justification = resolver.resolve(name)
            if justification is not None:
                justifications[name] = justification
            return justification is not None

        unused = build_unused(analysed, matcher.used, is_justified)

        result = AnalysisResult(
            directly_used=tuple(name for name in analysed if name in matcher.used),
            transitively_justified=tuple(name for name in analysed if name in justifications),
            unused=tuple(unused),
            usage=MappingProxyType({name: matcher.records[name].freeze() for name in analysed if name in matcher.used}),
            justifications=MappingProxyType(dict(justifications)),
            parse_errors=tuple(extractor.diagnostics),
            lookup_warnings=tuple(graph.warnings),
        )
        self.log.debug(
            "Analysed %d dependencies across %d file(s): %d used, %d justified, %d unused",
            len(analysed), len(files), len(result.directly_used),
            len(result.transitively_justified), len(result.unused),
        )
        return result


def analyze_project(root, **options) -> AnalysisResult:
    """Convenience wrapper: ``analyze_project(".", include_dev=True)``."""
    settings = AnalyzerSettings(root=Path(root).resolve(), **options)
    return DependencyAnalyzer(settings).analyze()
