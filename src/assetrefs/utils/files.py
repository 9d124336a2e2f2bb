"""Utility helpers for walking the asset tree and printing paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

METADATA_SUFFIX = ".meta"
SCENE_SUFFIX = ".unity"


def iter_corpus_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under root, descending into directories."""
    yield from sorted(child for child in Path(root).rglob("*") if child.is_file())


def list_corpus_files(root: Path) -> list[Path]:
    return list(iter_corpus_files(root))


def is_metadata_file(path: Path | str) -> bool:
    return str(path).endswith(METADATA_SUFFIX)


def metadata_path(path: Path) -> Path:
    """Return the sidecar metadata path for an asset."""
    return Path(str(path) + METADATA_SUFFIX)


def display_path(path: Path, *, absolute: bool = False, base: Path | None = None) -> str:
    """Format a path for output using forward slashes.

    Paths are shown relative to ``base`` (the invocation directory by default)
    unless ``absolute`` is set.
    """
    path = Path(path)
    if not absolute and path.is_absolute():
        text = os.path.relpath(path, base if base is not None else Path.cwd())
    else:
        text = os.path.abspath(path)
    return text.replace("\\", "/")
