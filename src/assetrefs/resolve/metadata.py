"""Sidecar metadata reading.

Every asset has a companion ``<asset>.meta`` text file. Only two of its
fields matter here: the ``guid`` that other files use to reference the asset
and the ``assetBundleName`` that marks it as loadable by name.
"""

from __future__ import annotations

import logging
from pathlib import Path

from assetrefs.models import MetadataInfo
from assetrefs.utils.files import metadata_path

LOGGER = logging.getLogger(__name__)

IDENTIFIER_PREFIX = "guid: "
BUNDLE_PREFIX = "assetBundleName:"


class MetadataError(Exception):
    """Raised when an asset's metadata is missing or has no identifier."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason} for asset: {path}")
        self.path = path
        self.reason = reason


def read_metadata(path: Path) -> MetadataInfo:
    """Read the identifier and bundle name from the sidecar of ``path``."""
    sidecar = metadata_path(path)
    identifier: str | None = None
    bundle_name: str | None = None
    try:
        with sidecar.open("r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if identifier is None and line.startswith(IDENTIFIER_PREFIX):
                    identifier = line[len(IDENTIFIER_PREFIX) :].strip()
                elif bundle_name is None and line.lstrip().startswith(BUNDLE_PREFIX):
                    bundle_name = line.lstrip()[len(BUNDLE_PREFIX) :].strip()
                if identifier is not None and bundle_name is not None:
                    break
    except OSError as exc:
        raise MetadataError(path, f"Could not read {sidecar.name}") from exc

    if not identifier:
        raise MetadataError(path, "GUID not found in .meta")

    LOGGER.debug("Read metadata for %s: guid=%s bundle=%r", path, identifier, bundle_name)
    return MetadataInfo(identifier=identifier, bundle_name=bundle_name or "")
