"""Shared fixtures: throwaway Node.js projects on disk."""

import json
from pathlib import Path
from typing import Dict, Optional

import pytest


def write_project(root: Path, manifest: Dict, files: Optional[Dict[str, str]] = None,
                  installed: Optional[Dict[str, Dict]] = None) -> Path:
    """Create package.json, source files and node_modules/<name>/package.json entries."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(manifest), encoding="utf-8")

    for relative, content in (files or {}).items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    for name, package_json in (installed or {}).items():
        package_dir = root / "node_modules" / name
        package_dir.mkdir(parents=True, exist_ok=True)
        data = {"name": name, "version": "1.0.0", **package_json}
        (package_dir / "package.json").write_text(json.dumps(data), encoding="utf-8")

    return root


@pytest.fixture
def make_project(tmp_path):
    """Factory fixture: make_project(manifest, files=..., installed=...) -> project root."""

    def _make(manifest, files=None, installed=None, name="app"):
        return write_project(tmp_path / name, manifest, files, installed)

    return _make
