"""Reference finding pipeline."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from assetrefs.config import AppConfig
from assetrefs.resolve.resolver import CorpusLister, ReferentResolver
from assetrefs.resolve.targets import TargetSet, build_target_set
from assetrefs.scan.engine import ActivityFlags, MatchCallback, MatchCollector
from assetrefs.scan.identifiers import IdentifierScanner
from assetrefs.scan.names import NameScanner
from assetrefs.scan.results import ScanReport, aggregate
from assetrefs.utils.files import list_corpus_files

LOGGER = logging.getLogger(__name__)


class ReferenceFinder:
    """Resolves search terms and scans the asset tree for their referrers."""

    def __init__(
        self,
        config: AppConfig,
        *,
        lister: CorpusLister = list_corpus_files,
        base_dir: Optional[Path] = None,
        on_match: Optional[MatchCallback] = None,
        on_name_pass: Optional[Callable[[TargetSet], None]] = None,
    ) -> None:
        self.config = config
        self.lister = lister
        self.base_dir = base_dir
        self.on_match = on_match
        self.on_name_pass = on_name_pass
        self.assets_dir = config.resolve_assets_dir(base_dir)

    def make_resolver(self) -> ReferentResolver:
        return ReferentResolver(
            self.assets_dir,
            self.lister,
            scripts_dir=self.config.resolve_scripts_dir(self.base_dir),
        )

    def build_targets(self, terms: Iterable[str]) -> TargetSet:
        """Resolve terms to targets. Raises on the first term that cannot be resolved."""
        return build_target_set(
            terms,
            self.make_resolver(),
            search_binaries=self.config.search_binaries,
        )

    def scan_files(self) -> list[Path]:
        if self.config.limited_files:
            return [Path(path) for path in self.config.limited_files]
        return list(self.lister(self.assets_dir))

    async def find(self, target_set: TargetSet, files: Optional[Sequence[Path]] = None) -> ScanReport:
        """Run the identifier pass, then the name pass for named targets."""
        files = list(files) if files is not None else self.scan_files()
        flags = ActivityFlags(target_set.targets)
        collector = MatchCollector(on_match=self.on_match)
        options = dict(
            flags=flags,
            collector=collector,
            first_match_only=self.config.first_match_only,
            max_concurrency=self.config.max_concurrency,
        )

        if not self.config.as_resources_only:
            scanner = IdentifierScanner(target_set.targets, target_set.scan_extensions, **options)
            found = await scanner.scan(files)
            LOGGER.info("Identifier pass found %d references", len(found))

        if target_set.named_targets:
            if self.on_name_pass is not None:
                self.on_name_pass(target_set)
            scanner = NameScanner(target_set.targets, target_set.scan_extensions, **options)
            found = await scanner.scan(files)
            LOGGER.info("Name pass found %d possible references", len(found))

        return aggregate(target_set.targets, collector.records)

    def run(self, terms: Iterable[str]) -> ScanReport:
        target_set = self.build_targets(terms)
        return asyncio.run(self.find(target_set))
