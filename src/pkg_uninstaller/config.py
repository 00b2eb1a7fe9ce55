"""
Per-run analyzer settings.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .constants import MODULES_DIR


@dataclass(frozen=True)
class AnalyzerSettings:
    """Options for one analysis run."""

    root: Path
    include_dev: bool = False  # also analyse devDependencies
    verbose: bool = False  # report per-reference matches and justifications at INFO
    respect_gitignore: bool = True
    additional_excludes: Tuple[str, ...] = ()
    modules_dir: str = MODULES_DIR
