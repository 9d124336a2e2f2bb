"""Core assetrefs data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ScanStrategy(str, Enum):
    """How a referrer was found."""

    IDENTIFIER = "identifier"
    NAME = "name"


@dataclass(frozen=True, slots=True)
class MetadataInfo:
    """Fields extracted from an asset's sidecar metadata file."""

    identifier: str
    bundle_name: str = ""

    @property
    def is_bundled(self) -> bool:
        return bool(self.bundle_name)


@dataclass(frozen=True, slots=True)
class TargetDescriptor:
    """Resolved asset whose referrers are being searched for."""

    path: Path
    identifier: str
    is_code_target: bool = False
    is_named_resource: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def base_name(self) -> str:
        return self.path.stem


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A scanned file paired with the target it references."""

    file: Path
    target: TargetDescriptor
    strategy: ScanStrategy = ScanStrategy.IDENTIFIER
