"""Command line interface for assetrefs."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from assetrefs.config import AppConfig, AssetsDirNotFoundError
from assetrefs.finder import ReferenceFinder
from assetrefs.models import MatchRecord, ScanStrategy
from assetrefs.resolve.metadata import MetadataError
from assetrefs.resolve.resolver import ReferentNotFound, is_named_resource_path
from assetrefs.resolve.targets import TargetSet
from assetrefs.utils.files import display_path

EXIT_FAILURE = 1
EXIT_NOT_FOUND = 2

console = Console()
app = typer.Typer(help="assetrefs - find which assets reference a file")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _split_files(value: Optional[str]) -> Optional[List[Path]]:
    if not value:
        return None
    files = [Path(item.strip()) for item in value.split(",") if item.strip()]
    return files or None


class _Printer:
    """Writes paths in the configured relative/absolute form."""

    def __init__(self, config: AppConfig, base: Path) -> None:
        self.config = config
        self.base = base

    def path(self, path: Path) -> str:
        return display_path(path, absolute=self.config.absolute_paths, base=self.base)

    def line(self, text: str = "") -> None:
        console.print(text, markup=False, highlight=False, soft_wrap=True)

    def match(self, record: MatchRecord) -> None:
        if record.strategy is ScanStrategy.NAME:
            self.line(f"possible match for {record.target.name}: {self.path(record.file)}")
        elif self.config.show_targets:
            self.line(f"{self.path(record.file)} -> {self.path(record.target.path)}")
        else:
            self.line(self.path(record.file))

    def name_pass(self, target_set: TargetSet) -> None:
        self.line()
        for target in target_set.named_targets:
            if is_named_resource_path(target.path):
                reason = "is in Resources/"
            else:
                reason = "is in an asset bundle"
            self.line(f"{target.name} {reason}, so also searching for references by name.")
        self.line()


@app.command()
def find(
    terms: List[str] = typer.Argument(
        ..., help="Files (or file name fragments) to find references to."
    ),
    assets_dir: Optional[Path] = typer.Option(
        None, "--assets-dir", help="Assets directory (default: found above the current directory)"
    ),
    binary: bool = typer.Option(False, "--binary", help="Search binary files as well"),
    absolute: bool = typer.Option(False, "--absolute", "--absolute-paths", help="Print absolute paths"),
    show_targets: bool = typer.Option(
        False, "--show-targets", help="Print which target each referrer refers to"
    ),
    first_match_only: bool = typer.Option(
        False, "--first-match-only", help="Stop searching for a target after its first reference"
    ),
    unreferenced: bool = typer.Option(
        False, "--unreferenced", "--print-unreferenced", help="List targets with no references"
    ),
    as_resources_only: bool = typer.Option(
        False, "--as-resources-only", help="Only search for references by resource name"
    ),
    limited_files: Optional[str] = typer.Option(
        None,
        "--debug-search-in-these-files-only",
        help="Comma-separated list of files to search instead of the whole tree",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Find files that reference the given assets."""
    _setup_logging(verbose)
    config = AppConfig(
        assets_dir=assets_dir,
        search_binaries=binary,
        absolute_paths=absolute,
        show_targets=show_targets,
        first_match_only=first_match_only,
        print_unreferenced=unreferenced,
        as_resources_only=as_resources_only,
        limited_files=_split_files(limited_files),
    )
    base = Path.cwd()
    printer = _Printer(config, base)

    try:
        finder = ReferenceFinder(
            config,
            base_dir=base,
            on_match=printer.match,
            on_name_pass=printer.name_pass,
        )
        target_set = finder.build_targets(terms)
    except AssetsDirNotFoundError as exc:
        printer.line(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except ReferentNotFound as exc:
        printer.line(f"Not found: {exc.term}")
        raise typer.Exit(code=EXIT_NOT_FOUND) from exc
    except MetadataError as exc:
        printer.line(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc

    for target in target_set.targets:
        if config.as_resources_only:
            printer.line(f"Finding references to: {target.name} (as resource)")
        else:
            printer.line(f"Finding references to: {target.name} -- {target.identifier}")
    if not config.as_resources_only:
        printer.line()

    try:
        report = asyncio.run(finder.find(target_set))
    except OSError as exc:
        printer.line(f"Error scanning assets: {exc}")
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if config.print_unreferenced:
        prefix = "UNREFERENCED as resource: " if config.as_resources_only else "UNREFERENCED: "
        printer.line()
        for target in report.unreferenced:
            printer.line(prefix + printer.path(target.path))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
