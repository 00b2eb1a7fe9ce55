"""
Dependency usage analysis.
"""

from .analyzer import DependencyAnalyzer, analyze_project
from .manifest import (
    DependencyDeclaration,
    DependencySection,
    Manifest,
    ManifestGraph,
    ProjectManifest,
    load_root_manifest,
)
from .transitive import Justification, JustificationRule, TransitiveResolver
from .unused import AnalysisResult, build_unused
from .usage import UsageMatcher, UsageRecord, UsageSummary, match_dependency

__all__ = [
    "AnalysisResult",
    "DependencyAnalyzer",
    "DependencyDeclaration",
    "DependencySection",
    "Justification",
    "JustificationRule",
    "Manifest",
    "ManifestGraph",
    "ProjectManifest",
    "TransitiveResolver",
    "UsageMatcher",
    "UsageRecord",
    "UsageSummary",
    "analyze_project",
    "build_unused",
    "load_root_manifest",
    "match_dependency",
]
