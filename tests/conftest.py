"""Shared fixtures for building small asset trees on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest


def write_asset(
    root: Path,
    relative: str,
    content: str = "",
    *,
    guid: Optional[str] = None,
    bundle: Optional[str] = None,
) -> Path:
    """Write an asset file and, when ``guid`` is given, its .meta sidecar."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    if guid is not None:
        lines = ["fileFormatVersion: 2", f"guid: {guid}", "DefaultImporter:"]
        if bundle is not None:
            lines.append(f"  assetBundleName: {bundle}")
        lines.append("  assetBundleVariant: ")
        Path(str(path) + ".meta").write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "Assets"
    directory.mkdir()
    return directory.resolve()


@pytest.fixture
def make_asset(assets_dir: Path) -> Callable[..., Path]:
    def _make(relative: str, content: str = "", **kwargs: Optional[str]) -> Path:
        return write_asset(assets_dir, relative, content, **kwargs).resolve()

    return _make
