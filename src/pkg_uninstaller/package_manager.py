"""
Package manager detection and batched package removal.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import (
    DEFAULT_PACKAGE_MANAGER,
    LOCKFILES,
    REMOVE_COMMANDS,
    UNINSTALL_BATCH_SIZE,
)

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of one removal command."""

    packages: List[str]
    command: List[str]
    success: bool
    output: str = ""


def detect_package_manager(root: Path) -> str:
    """Pick yarn or pnpm when their lockfile is present, npm otherwise."""
    root = Path(root)
    for lockfile, manager in LOCKFILES:
        if (root / lockfile).exists():
            return manager
    return DEFAULT_PACKAGE_MANAGER


def removal_command(package_manager: str) -> List[str]:
    return list(REMOVE_COMMANDS.get(package_manager, REMOVE_COMMANDS[DEFAULT_PACKAGE_MANAGER]))


def chunked(packages: Sequence[str], size: int) -> List[List[str]]:
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [list(packages[i:i + size]) for i in range(0, len(packages), size)]


def uninstall_packages_batch(packages: Sequence[str], package_manager: str,
                             batch_size: int = UNINSTALL_BATCH_SIZE,
                             cwd: Optional[Path] = None,
                             dry_run: bool = False) -> List[BatchResult]:
    """
    Remove packages a few at a time with the project's package manager.

    A failed batch is logged and the remaining batches still run.

    Args:
        packages: Package names to remove
        package_manager: One of 'npm', 'yarn', 'pnpm'
        batch_size: Packages per command
        cwd: Directory to run the commands in
        dry_run: Log the commands without running them

    Returns:
        One BatchResult per command, in execution order
    """
    results = []
    for chunk in chunked(packages, batch_size):
        command = removal_command(package_manager) + chunk
        logger.info("Running: %s", " ".join(command))

        if dry_run:
            results.append(BatchResult(chunk, command, success=True))
            continue

        try:
            process = subprocess.run(
                command,
                capture_output=True,
                text=True,
                cwd=str(cwd) if cwd else None,
                check=False,
            )
        except OSError as e:
            logger.error("Error: %s", e)
            logger.error("Failed to uninstall batch: %s", ", ".join(chunk))
            results.append(BatchResult(chunk, command, success=False, output=str(e)))
            continue

        if process.returncode != 0:
            logger.error("Error: %s", (process.stderr or process.stdout).strip())
            logger.error("Failed to uninstall batch: %s", ", ".join(chunk))
            results.append(BatchResult(chunk, command, success=False, output=process.stderr))
        elif process.stderr:
            logger.warning("Warning: %s", process.stderr.strip())
            results.append(BatchResult(chunk, command, success=True, output=process.stderr))
        else:
            logger.info("Successfully uninstalled: %s", ", ".join(chunk))
            results.append(BatchResult(chunk, command, success=True, output=process.stdout))

    logger.info("All batches processed.")
    return results
