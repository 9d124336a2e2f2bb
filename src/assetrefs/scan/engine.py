"""Shared plumbing for the concurrent scanners.

Each eligible file gets its own task. Tasks are admitted through a semaphore
so at most ``max_concurrency`` files are being read at once. The only state
shared between tasks is the set of still-active targets and the list of
match records, and both are guarded by locks.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Awaitable, Callable, Collection, Iterable, List, Optional, Sequence

from assetrefs.models import MatchRecord, TargetDescriptor

LOGGER = logging.getLogger(__name__)

MatchCallback = Callable[[MatchRecord], None]


class ActivityFlags:
    """Per-target active flags used by first-match-only mode."""

    def __init__(self, targets: Iterable[TargetDescriptor]) -> None:
        self._lock = threading.Lock()
        self._active = {target.path: True for target in targets}

    def is_active(self, target: TargetDescriptor) -> bool:
        with self._lock:
            return self._active.get(target.path, False)

    def deactivate(self, target: TargetDescriptor) -> bool:
        """Clear the flag. Only the caller that actually cleared it gets True."""
        with self._lock:
            if not self._active.get(target.path, False):
                return False
            self._active[target.path] = False
            return True

    def active(self, targets: Sequence[TargetDescriptor]) -> List[TargetDescriptor]:
        with self._lock:
            return [target for target in targets if self._active.get(target.path, False)]

    def any_active(self, targets: Sequence[TargetDescriptor]) -> bool:
        return bool(self.active(targets))


class MatchCollector:
    """Append-only list of match records shared by all scan tasks."""

    def __init__(self, on_match: Optional[MatchCallback] = None) -> None:
        self._lock = threading.Lock()
        self._records: List[MatchRecord] = []
        self.on_match = on_match

    def add(self, record: MatchRecord) -> None:
        with self._lock:
            self._records.append(record)
            if self.on_match is not None:
                self.on_match(record)

    @property
    def records(self) -> List[MatchRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def filter_by_extension(files: Iterable[Path], extensions: Collection[str]) -> List[Path]:
    """Keep files whose (case-sensitive) extension is in ``extensions``."""
    return [Path(path) for path in files if Path(path).suffix in extensions]


def read_text(path: Path) -> str:
    # Binary containers are searched for ASCII identifiers, so undecodable
    # bytes are replaced rather than rejected.
    return Path(path).read_text(encoding="utf-8", errors="replace")


async def read_content(path: Path) -> str:
    return await asyncio.to_thread(read_text, path)


async def run_bounded(
    files: Sequence[Path],
    scan_file: Callable[[Path], Awaitable[object]],
    *,
    max_concurrency: int,
) -> None:
    """Run ``scan_file`` for every file, at most ``max_concurrency`` at a time.

    The first exception raised by any task propagates to the caller.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def scan_with_semaphore(path: Path) -> None:
        async with semaphore:
            await scan_file(path)

    LOGGER.debug("Scanning %d files (concurrency=%d)", len(files), max_concurrency)
    await asyncio.gather(*(scan_with_semaphore(path) for path in files))


class BaseScanner:
    """Common state for the identifier and name scanners."""

    strategy_label = "scan"

    def __init__(
        self,
        targets: Sequence[TargetDescriptor],
        extensions: Collection[str],
        *,
        flags: Optional[ActivityFlags] = None,
        collector: Optional[MatchCollector] = None,
        first_match_only: bool = False,
        max_concurrency: int = 1,
    ) -> None:
        self.targets = list(targets)
        self.extensions = frozenset(extensions)
        self.flags = flags if flags is not None else ActivityFlags(self.targets)
        self.collector = collector if collector is not None else MatchCollector()
        self.first_match_only = first_match_only
        self.max_concurrency = max_concurrency

    def matches(self, content: str, target: TargetDescriptor) -> bool:
        raise NotImplementedError

    def make_record(self, file_path: Path, target: TargetDescriptor) -> MatchRecord:
        raise NotImplementedError

    def record_match(self, file_path: Path, target: TargetDescriptor) -> Optional[MatchRecord]:
        if self.first_match_only and not self.flags.deactivate(target):
            # Another task already claimed this target's single record.
            return None
        record = self.make_record(file_path, target)
        self.collector.add(record)
        return record

    async def scan_file(self, file_path: Path) -> List[MatchRecord]:
        """Check one file against every still-active target."""
        if not self.flags.any_active(self.targets):
            return []
        content = await read_content(file_path)
        resolved = Path(file_path).resolve()
        found: List[MatchRecord] = []
        for target in self.targets:
            if not self.flags.is_active(target):
                continue
            if resolved == target.path:
                continue
            if self.matches(content, target):
                record = self.record_match(file_path, target)
                if record is not None:
                    found.append(record)
        return found

    async def scan(self, files: Iterable[Path]) -> List[MatchRecord]:
        """Scan every eligible file and return the records this pass produced."""
        eligible = filter_by_extension(files, self.extensions)
        start = len(self.collector)
        LOGGER.info("%s pass: %d eligible files", self.strategy_label, len(eligible))

        await run_bounded(eligible, self.scan_file, max_concurrency=self.max_concurrency)
        return self.collector.records[start:]
