"""Search container files for assets loaded by name.

Assets under a ``Resources`` directory or in an asset bundle are loaded at
runtime by their file name rather than by identifier, so the identifier scan
cannot see those references.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Collection, Sequence

from assetrefs.models import MatchRecord, ScanStrategy, TargetDescriptor
from assetrefs.scan.engine import BaseScanner
from assetrefs.utils.text import contains_word


class NameScanner(BaseScanner):
    """Finds files mentioning a named target's base name as a whole word."""

    strategy_label = "Resource name"

    def __init__(
        self,
        targets: Sequence[TargetDescriptor],
        extensions: Collection[str],
        **kwargs: Any,
    ) -> None:
        named = [target for target in targets if target.is_named_resource]
        super().__init__(named, extensions, **kwargs)

    def matches(self, content: str, target: TargetDescriptor) -> bool:
        return contains_word(content, target.base_name)

    def make_record(self, file_path: Path, target: TargetDescriptor) -> MatchRecord:
        return MatchRecord(file=Path(file_path), target=target, strategy=ScanStrategy.NAME)
