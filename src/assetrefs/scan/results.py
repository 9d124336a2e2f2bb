"""Aggregation of match records into a report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence

from assetrefs.models import MatchRecord, ScanStrategy, TargetDescriptor


def dedupe_records(records: Iterable[MatchRecord]) -> List[MatchRecord]:
    """Collapse records with the same file, target and strategy."""
    seen: set = set()
    unique: List[MatchRecord] = []
    for record in records:
        key = (Path(record.file), record.target.path, record.strategy)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


@dataclass(slots=True)
class ScanReport:
    targets: List[TargetDescriptor] = field(default_factory=list)
    matches: List[MatchRecord] = field(default_factory=list)

    def referrers(self, target: TargetDescriptor) -> List[Path]:
        """Files referencing ``target``, sorted."""
        return sorted({record.file for record in self.matches if record.target.path == target.path})

    def matches_for(self, strategy: ScanStrategy) -> List[MatchRecord]:
        return [record for record in self.matches if record.strategy is strategy]

    def is_referenced(self, target: TargetDescriptor) -> bool:
        return any(record.target.path == target.path for record in self.matches)

    @property
    def unreferenced(self) -> List[TargetDescriptor]:
        referenced = {record.target.path for record in self.matches}
        return sorted(
            (target for target in self.targets if target.path not in referenced),
            key=lambda target: target.path,
        )


def aggregate(targets: Sequence[TargetDescriptor], records: Iterable[MatchRecord]) -> ScanReport:
    return ScanReport(targets=list(targets), matches=dedupe_records(records))
