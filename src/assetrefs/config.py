"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ASSETS_DIR_NAME = "Assets"
SCRIPTS_DIR_NAME = "Scripts"


class AssetsDirNotFoundError(Exception):
    """Raised when no Assets directory exists above the starting directory."""


def default_concurrency() -> int:
    """Number of files scanned at once: one less than the processor count."""
    return max(1, (os.cpu_count() or 2) - 1)


def find_assets_dir(start: Path) -> Path:
    """Walk up from ``start`` until a directory containing ``Assets/`` is found."""
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        assets = candidate / ASSETS_DIR_NAME
        if assets.is_dir():
            return assets
    raise AssetsDirNotFoundError(f"Could not find an {ASSETS_DIR_NAME} directory above {start}")


@dataclass(slots=True)
class AppConfig:
    assets_dir: Path | None = None
    scripts_dir: Path | None = None
    search_binaries: bool = False
    absolute_paths: bool = False
    show_targets: bool = False
    first_match_only: bool = False
    print_unreferenced: bool = False
    as_resources_only: bool = False
    limited_files: list[Path] | None = None
    max_concurrency: int = 0

    def __post_init__(self) -> None:
        if self.max_concurrency <= 0:
            self.max_concurrency = default_concurrency()

    def resolve_assets_dir(self, base_dir: Path | None = None) -> Path:
        if self.assets_dir is None:
            self.assets_dir = find_assets_dir(base_dir if base_dir is not None else Path.cwd())
        elif not Path(self.assets_dir).is_absolute() and base_dir is not None:
            self.assets_dir = base_dir / self.assets_dir
        return Path(self.assets_dir).resolve()

    def resolve_scripts_dir(self, base_dir: Path | None = None) -> Path:
        if self.scripts_dir is None:
            return self.resolve_assets_dir(base_dir) / SCRIPTS_DIR_NAME
        if not Path(self.scripts_dir).is_absolute() and base_dir is not None:
            return (base_dir / self.scripts_dir).resolve()
        return Path(self.scripts_dir).resolve()
