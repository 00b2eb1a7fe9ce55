"""
Manifest models and the lazily built manifest graph.

The root ``package.json`` is loaded once per run. Nested manifests under
``node_modules`` are read on demand through ManifestGraph, which caches every
lookup (including failed ones) so the justification search sees one
consistent view of each dependency.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..constants import (
    DEV_SECTION,
    MANIFEST_FILE,
    MODULES_DIR,
    OPTIONAL_SECTION,
    PEER_SECTION,
    RUNTIME_SECTION,
)
from ..errors import LookupWarning, PreconditionError

logger = logging.getLogger(__name__)


class DependencySection(Enum):
    """Manifest sections that declare dependencies."""

    RUNTIME = RUNTIME_SECTION
    DEV = DEV_SECTION
    PEER = PEER_SECTION
    OPTIONAL = OPTIONAL_SECTION


@dataclass(frozen=True)
class DependencyDeclaration:
    """A name/version-range pair declared in one manifest section."""

    name: str
    version_range: str
    section: DependencySection

    @property
    def label(self) -> str:
        return f"{self.name} ({self.section.value})"


@dataclass
class Manifest:
    """A package's own name, version and dependency sections."""

    name: str
    version: Optional[str] = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    optional_dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any], log: Optional[logging.Logger] = None) -> 'Manifest':
        """Build a manifest from decoded package.json data, dropping malformed sections."""
        log = log or logger

        def section(key: str) -> Dict[str, str]:
            value = data.get(key)
            if value is None:
                return {}
            if not isinstance(value, dict):
                log.warning("Ignoring malformed '%s' section in manifest of %s", key, name)
                return {}
            return {str(dep): str(version) for dep, version in value.items()}

        version = data.get('version')
        return cls(
            name=str(data.get('name') or name),
            version=str(version) if version is not None else None,
            dependencies=section(RUNTIME_SECTION),
            dev_dependencies=section(DEV_SECTION),
            peer_dependencies=section(PEER_SECTION),
            optional_dependencies=section(OPTIONAL_SECTION),
        )

    def section(self, section: DependencySection) -> Dict[str, str]:
        return {
            DependencySection.RUNTIME: self.dependencies,
            DependencySection.DEV: self.dev_dependencies,
            DependencySection.PEER: self.peer_dependencies,
            DependencySection.OPTIONAL: self.optional_dependencies,
        }[section]

    def is_empty(self) -> bool:
        return not (self.dependencies or self.dev_dependencies
                    or self.peer_dependencies or self.optional_dependencies)


class ProjectManifest:
    """The root project's manifest and its declarations."""

    def __init__(self, path: Path, manifest: Manifest):
        self.path = path
        self.manifest = manifest

    @property
    def name(self) -> str:
        return self.manifest.name

    def declarations(self) -> List[DependencyDeclaration]:
        """All declarations, section by section, in manifest order."""
        declarations = []
        for section in DependencySection:
            for name, version_range in self.manifest.section(section).items():
                declarations.append(DependencyDeclaration(name, version_range, section))
        return declarations

    def declared_names(self, *sections: DependencySection) -> List[str]:
        """Names declared in the given sections, without duplicates, in order."""
        names: Dict[str, None] = {}
        for section in sections or tuple(DependencySection):
            for name in self.manifest.section(section):
                names.setdefault(name, None)
        return list(names)

    def all_dependencies(self) -> Dict[str, str]:
        """Every declared dependency merged into one name -> version-range map."""
        merged: Dict[str, str] = {}
        for declaration in self.declarations():
            merged.setdefault(declaration.name, declaration.version_range)
        return merged


def load_root_manifest(root: Path, log: Optional[logging.Logger] = None) -> ProjectManifest:
    """
    Load the project's package.json.

    Raises:
        PreconditionError: If the manifest is missing, unreadable or not a JSON object
    """
    log = log or logger
    path = Path(root).resolve() / MANIFEST_FILE
    if not path.is_file():
        raise PreconditionError(f"No {MANIFEST_FILE} found in the current directory ({path.parent}).")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PreconditionError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise PreconditionError(f"{path} does not contain a JSON object")

    project = ProjectManifest(path, Manifest.from_dict(path.parent.name, data, log))
    log.debug("Loaded root manifest %s with %d declaration(s)", path, len(project.declarations()))
    return project


class ManifestGraph:
    """
    Memoized name -> Manifest lookup over installed dependencies.

    Nodes are dependency names; edges are the runtime, peer and optional
    sections of each node's manifest. A dependency that is not installed or
    whose manifest cannot be read resolves to an empty manifest and records a
    LookupWarning once.
    """

    def __init__(self, root: Path, modules_dir: str = MODULES_DIR,
                 log: Optional[logging.Logger] = None):
        self.modules_path = Path(root).resolve() / modules_dir
        self.log = log or logger
        self.warnings: List[LookupWarning] = []
        self._cache: Dict[str, Manifest] = {}

    def manifest_path(self, name: str) -> Path:
        # Scoped names resolve to node_modules/@scope/name/package.json
        return self.modules_path.joinpath(*name.split('/')) / MANIFEST_FILE

    def get(self, name: str) -> Manifest:
        """Return the cached manifest for ``name``, reading it on first use."""
        manifest = self._cache.get(name)
        if manifest is None:
            manifest = self._read(name)
            self._cache[name] = manifest
        return manifest

    def peer_dependencies(self, name: str) -> Dict[str, str]:
        return self.get(name).peer_dependencies

    def requirements(self, name: str) -> Dict[str, str]:
        """Runtime and optional dependencies of ``name`` merged."""
        manifest = self.get(name)
        return {**manifest.dependencies, **manifest.optional_dependencies}

    def __contains__(self, name: str) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def _read(self, name: str) -> Manifest:
        path = self.manifest_path(name)
        if not path.is_file():
            return self._missing(name, f"{MANIFEST_FILE} not found at expected path: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return self._missing(name, f"failed to read {path}: {e}")

        if not isinstance(data, dict):
            return self._missing(name, f"{path} does not contain a JSON object")

        return Manifest.from_dict(name, data, self.log)

    def _missing(self, name: str, reason: str) -> Manifest:
        warning = LookupWarning(name, reason)
        self.warnings.append(warning)
        self.log.warning("%s", warning)
        return Manifest(name=name)
