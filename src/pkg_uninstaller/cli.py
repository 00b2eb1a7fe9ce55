#!/usr/bin/env python3
"""Command-line interface for pkg-uninstaller.

Usage:
    pkg-uninstaller uninstall
    pkg-uninstaller unused [--dev] [--verbose] [--json] [--remove] [--yes] [--dry-run]

Examples:
    # Pick packages to remove from package.json interactively
    pkg-uninstaller uninstall

    # Report dependencies no source file references
    pkg-uninstaller unused --verbose

    # Remove them without asking
    pkg-uninstaller unused --remove --yes

Environment Variables:
    PKG_UNINSTALLER_LOG_LEVEL: Overrides the diagnostic log level (e.g. DEBUG)
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from . import __version__
from .analysis import DependencyAnalyzer, load_root_manifest
from .analysis.manifest import DependencyDeclaration
from .config import AnalyzerSettings
from .constants import LOG_FORMAT, LOG_LEVEL_ENV
from .errors import PreconditionError
from .package_manager import detect_package_manager, uninstall_packages_batch

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Send diagnostics to stderr; DEBUG with --verbose unless the environment overrides it."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    level_name = os.getenv(LOG_LEVEL_ENV)
    level = logging.DEBUG if verbose else logging.INFO
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root_logger.setLevel(level)


def parse_selection(text: str, count: int) -> List[int]:
    """
    Turn "1, 3-5" into zero-based indexes.

    Raises:
        ValueError: If a number is out of range or malformed
    """
    indexes: List[int] = []
    for token in text.replace(' ', '').split(','):
        if not token:
            continue
        if '-' in token:
            start, end = token.split('-', 1)
            numbers = range(int(start), int(end) + 1)
        else:
            numbers = [int(token)]
        for number in numbers:
            if not 1 <= number <= count:
                raise ValueError(f"{number} is not between 1 and {count}")
            if number - 1 not in indexes:
                indexes.append(number - 1)
    return indexes


def select_packages(declarations: Sequence[DependencyDeclaration]) -> List[str]:
    """Show the declared packages and ask which to remove."""
    table = Table(title="Declared packages")
    table.add_column("#", justify="right")
    table.add_column("Package")
    table.add_column("Version")
    for number, declaration in enumerate(declarations, start=1):
        table.add_row(str(number), declaration.label, declaration.version_range)
    console.print(table)

    while True:
        answer = Prompt.ask("Select packages to uninstall (e.g. 1,3-5; blank for none)", default="")
        try:
            indexes = parse_selection(answer, len(declarations))
        except ValueError as e:
            console.print(f"[red]Invalid selection: {escape(str(e))}[/red]")
            continue
        # A package declared in several sections is only removed once
        selected = []
        for index in indexes:
            name = declarations[index].name
            if name not in selected:
                selected.append(name)
        return selected


def run_uninstall(args: argparse.Namespace) -> int:
    root = Path(args.root).resolve()
    project = load_root_manifest(root)
    declarations = project.declarations()
    if not declarations:
        console.print("[yellow]No packages found to uninstall.[/yellow]")
        return 0

    try:
        selected = select_packages(declarations)
    except (KeyboardInterrupt, EOFError):
        err_console.print("[red]Prompt was closed forcefully.[/red]")
        return 1

    if not selected:
        console.print("[yellow]No packages selected for uninstallation.[/yellow]")
        return 0

    return _remove(selected, root, args.dry_run)


def run_unused(args: argparse.Namespace) -> int:
    root = Path(args.root).resolve()
    settings = AnalyzerSettings(
        root=root,
        include_dev=args.dev,
        verbose=args.verbose,
        respect_gitignore=not args.no_gitignore,
        additional_excludes=tuple(args.exclude or ()),
    )
    result = DependencyAnalyzer(settings).analyze()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_report(result, verbose=args.verbose)

    if not args.remove or not result.unused:
        return 0

    # Keep stdout clean for the JSON document
    status = err_console if args.json else console
    if not args.yes:
        try:
            confirmed = Confirm.ask(f"Uninstall {len(result.unused)} unused package(s)?",
                                    default=False, console=status)
        except (KeyboardInterrupt, EOFError):
            err_console.print("[red]Prompt was closed forcefully.[/red]")
            return 1
        if not confirmed:
            status.print("[yellow]No packages selected for uninstallation.[/yellow]")
            return 0

    return _remove(list(result.unused), root, args.dry_run, status=status)


def _print_report(result, verbose: bool) -> None:
    if verbose:
        for name in result.directly_used:
            record = result.usage[name]
            console.print(f"[green]{name}[/green]: {record.count} reference(s) in {len(record.files)} file(s)")
        for line in result.trace():
            console.print(f"[blue]{line}[/blue]")
        for error in result.parse_errors:
            console.print(f"[yellow]Skipped {escape(str(error))}[/yellow]")

    if not result.unused:
        console.print("[green]No unused dependencies found.[/green]")
        return
    console.print("[bold]Unused dependencies:[/bold]")
    for name in result.unused:
        console.print(f"  {name}")


def _remove(packages: List[str], root: Path, dry_run: bool, status: Console = console) -> int:
    package_manager = detect_package_manager(root)
    status.print(f"[blue]Detected package manager: {package_manager}[/blue]")
    results = uninstall_packages_batch(packages, package_manager, cwd=root, dry_run=dry_run)
    failed = [name for batch in results if not batch.success for name in batch.packages]
    if failed:
        err_console.print(f"[red]Failed to uninstall: {', '.join(failed)}[/red]")
        return 1
    status.print("[green]All batches processed.[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pkg-uninstaller',
        description='Uninstall Node.js packages interactively or find unused ones',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--root',
        default='.',
        help='Project directory containing package.json (default: current directory)'
    )
    common.add_argument(
        '--dry-run',
        action='store_true',
        help='Print removal commands without running them'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    uninstall = subparsers.add_parser('uninstall', parents=[common],
                                      help='Uninstall selected packages from package.json')
    uninstall.set_defaults(handler=run_uninstall)

    unused = subparsers.add_parser('unused', parents=[common],
                                   help='Report declared dependencies no source file uses')
    unused.add_argument('--dev', action='store_true', help='Also analyse devDependencies')
    unused.add_argument('--verbose', '-v', action='store_true',
                        help='Show reference counts and justification traces')
    unused.add_argument('--json', action='store_true', help='Output the result as JSON')
    unused.add_argument('--no-gitignore', action='store_true', help='Scan files ignored by .gitignore')
    unused.add_argument('--exclude', action='append', metavar='DIR',
                        help='Additional directory name to skip (repeatable)')
    unused.add_argument('--remove', action='store_true', help='Uninstall the unused dependencies')
    unused.add_argument('--yes', '-y', action='store_true', help='Do not ask before removing')
    unused.set_defaults(handler=run_unused)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=getattr(args, 'verbose', False))

    try:
        return args.handler(args)
    except PreconditionError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        return 1


if __name__ == '__main__':
    sys.exit(main())
