"""Tests for the shared scan plumbing."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from assetrefs.models import MatchRecord, TargetDescriptor
from assetrefs.scan.engine import (
    ActivityFlags,
    MatchCollector,
    filter_by_extension,
    read_text,
    run_bounded,
)


def _target(name: str) -> TargetDescriptor:
    return TargetDescriptor(path=Path(f"/Assets/{name}"), identifier=name)


class TestActivityFlags:
    """Test ActivityFlags."""

    def test_all_active_initially(self) -> None:
        targets = [_target("a.cs"), _target("b.cs")]
        flags = ActivityFlags(targets)

        assert flags.active(targets) == targets
        assert flags.any_active(targets)

    def test_deactivate_once(self) -> None:
        """Only the first caller clears the flag."""
        target = _target("a.cs")
        flags = ActivityFlags([target])

        assert flags.deactivate(target) is True
        assert flags.deactivate(target) is False
        assert not flags.is_active(target)
        assert not flags.any_active([target])

    def test_unknown_target_inactive(self) -> None:
        flags = ActivityFlags([])

        assert not flags.is_active(_target("x.cs"))


class TestMatchCollector:
    """Test MatchCollector."""

    def test_add_and_snapshot(self) -> None:
        collector = MatchCollector()
        record = MatchRecord(file=Path("/scene.unity"), target=_target("a.cs"))

        collector.add(record)
        snapshot = collector.records
        snapshot.clear()

        assert collector.records == [record]
        assert len(collector) == 1

    def test_callback_called(self) -> None:
        callback = MagicMock()
        collector = MatchCollector(on_match=callback)
        record = MatchRecord(file=Path("/scene.unity"), target=_target("a.cs"))

        collector.add(record)

        callback.assert_called_once_with(record)


class TestFilterByExtension:
    """Test filter_by_extension."""

    def test_case_sensitive(self) -> None:
        files = [Path("a.prefab"), Path("b.PREFAB"), Path("c.txt"), Path("d.overrideController")]

        result = filter_by_extension(files, {".prefab", ".overrideController"})

        assert result == [Path("a.prefab"), Path("d.overrideController")]


class TestReadText:
    """Test read_text."""

    def test_binary_content_readable(self, tmp_path: Path) -> None:
        path = tmp_path / "plugin.dll"
        path.write_bytes(b"\xff\xfe\x00abc123\x00\x80")

        assert "abc123" in read_text(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_text(tmp_path / "missing.asset")


class TestRunBounded:
    """Test run_bounded."""

    def test_limits_concurrency(self) -> None:
        running = 0
        peak = 0

        async def task(path: Path) -> None:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        files = [Path(f"{i}.asset") for i in range(10)]
        asyncio.run(run_bounded(files, task, max_concurrency=3))

        assert peak == 3

    def test_runs_every_file(self) -> None:
        seen: list = []

        async def task(path: Path) -> None:
            seen.append(path)

        files = [Path(f"{i}.asset") for i in range(5)]
        asyncio.run(run_bounded(files, task, max_concurrency=2))

        assert sorted(seen) == sorted(files)

    def test_error_propagates(self) -> None:
        async def task(path: Path) -> None:
            if path.name == "bad.asset":
                raise OSError("disk error")

        with pytest.raises(OSError, match="disk error"):
            asyncio.run(run_bounded([Path("ok.asset"), Path("bad.asset")], task, max_concurrency=2))

    def test_slot_released_after_failure(self) -> None:
        """A failing task does not leak its slot."""
        done: list = []

        async def task(path: Path) -> None:
            if path.name.startswith("bad"):
                raise ValueError(path.name)
            done.append(path)

        async def scenario() -> None:
            with pytest.raises(ValueError):
                await run_bounded([Path("bad.asset"), Path("good.asset")], task, max_concurrency=1)
            # The remaining task keeps running once the failed one frees its slot.
            await asyncio.sleep(0.05)

        asyncio.run(scenario())

        assert done == [Path("good.asset")]
