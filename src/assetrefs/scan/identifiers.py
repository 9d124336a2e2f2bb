"""Search container files for literal asset identifiers."""

from __future__ import annotations

from pathlib import Path

from assetrefs.models import MatchRecord, ScanStrategy, TargetDescriptor
from assetrefs.scan.engine import BaseScanner


class IdentifierScanner(BaseScanner):
    """Finds files containing a target's identifier as a substring.

    A file may reference several targets, so every target is checked even
    after one matches.
    """

    strategy_label = "Identifier"

    def matches(self, content: str, target: TargetDescriptor) -> bool:
        return target.identifier in content

    def make_record(self, file_path: Path, target: TargetDescriptor) -> MatchRecord:
        return MatchRecord(file=Path(file_path), target=target, strategy=ScanStrategy.IDENTIFIER)
