"""
Command line interface for todoscan.

Usage:
    todoscan [OPTIONS] PATHS...

Files are parsed directly; directories are walked with FolderScanner.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from .core.assembler import TodoAssembler
from .core.base import ScannerConfig
from .core.exceptions import TodoScanException
from .core.models import Todo
from .core.scanner import FolderScanner
from .core.scanner.folder_scanner import DEFAULT_CONFIG_FILENAME
from .parsers.languages import default_registry
from .storage.formats import FORMATTERS, TextFormatter, get_formatter


logger = logging.getLogger(__name__)


def _collect(paths: Tuple[Path, ...], config: ScannerConfig) -> List[Todo]:
    registry = default_registry()
    assembler = TodoAssembler(registry, prefilter=config.prefilter)
    scanner = FolderScanner(config, registry)

    todos: List[Todo] = []
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            # Flush pending files first to keep argument order
            todos.extend(assembler.parse_files(files, workers=config.workers))
            files = []
            logger.info(f"Scanning directory {path}")
            todos.extend(scanner.scan_todos(path))
        else:
            files.append(path)
    todos.extend(assembler.parse_files(files, workers=config.workers))
    return todos


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("--format", "output_format", type=click.Choice(sorted(FORMATTERS)),
              default="text", show_default=True, help="Output format.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="YAML file with a 'scanner' section. Defaults to .todoscan.yaml in the current directory.")
@click.option("--workers", type=click.IntRange(min=1), default=None,
              help="Number of files to parse in parallel.")
@click.option("--no-prefilter", is_flag=True,
              help="Feed every comment line to the parser, not only comments containing TODO.")
@click.option("--list-languages", is_flag=True,
              help="List file extensions parsed with a grammar and exit.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    paths: Tuple[Path, ...],
    output_format: str,
    config_path: Optional[Path],
    workers: Optional[int],
    no_prefilter: bool,
    list_languages: bool,
    verbose: bool
) -> None:
    """Find TODO annotations in PATHS and print them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console = Console(soft_wrap=True, highlight=False)
    err_console = Console(stderr=True, soft_wrap=True, highlight=False)

    if list_languages:
        for extension in default_registry().extensions():
            click.echo(extension)
        return

    try:
        if config_path is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        config = ScannerConfig.from_yaml(config_path)
        if workers is not None:
            config.workers = workers
        if no_prefilter:
            config.prefilter = False

        todos = _collect(paths, config)
        formatter = get_formatter(output_format)
    except TodoScanException as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    if isinstance(formatter, TextFormatter):
        for todo in todos:
            console.print(formatter.format_todo(todo), markup=False)
    else:
        click.echo(formatter.format(todos))


if __name__ == "__main__":
    main()
