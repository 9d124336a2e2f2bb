"""Building the set of targets for a run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from assetrefs.models import TargetDescriptor
from assetrefs.resolve.resolver import ReferentResolver
from assetrefs.utils.files import is_metadata_file

LOGGER = logging.getLogger(__name__)

# Containers that can reference scripts
CODE_CONTAINER_EXTENSIONS = (".prefab", ".unity", ".asset")
CONTAINER_EXTENSIONS = (
    ".asset",
    ".controller",
    ".mask",
    ".mat",
    ".overrideController",
    ".prefab",
    ".renderTexture",
    ".unity",
    ".xml",
)
BINARY_EXTENSIONS = (".dll", ".bin", ".exe")


@dataclass(slots=True)
class TargetSet:
    targets: list[TargetDescriptor] = field(default_factory=list)
    scan_extensions: frozenset[str] = frozenset()

    @property
    def named_targets(self) -> list[TargetDescriptor]:
        return [target for target in self.targets if target.is_named_resource]

    def __len__(self) -> int:
        return len(self.targets)


def dedupe_targets(targets: Iterable[TargetDescriptor]) -> list[TargetDescriptor]:
    """Drop targets whose path was already seen, keeping the first."""
    seen: set = set()
    unique: list[TargetDescriptor] = []
    for target in targets:
        key = target.path.resolve()
        if key in seen:
            LOGGER.debug("Skipping duplicate target %s", target.path)
            continue
        seen.add(key)
        unique.append(target)
    return unique


def scan_extensions_for(targets: Sequence[TargetDescriptor], *, search_binaries: bool = False) -> frozenset[str]:
    """Pick which container files need to be opened for these targets."""
    if all(target.is_code_target for target in targets):
        extensions = set(CODE_CONTAINER_EXTENSIONS)
    else:
        extensions = set(CONTAINER_EXTENSIONS)
    if search_binaries:
        extensions.update(BINARY_EXTENSIONS)
    return frozenset(extensions)


def build_target_set(
    terms: Iterable[str],
    resolver: ReferentResolver,
    *,
    search_binaries: bool = False,
) -> TargetSet:
    """Resolve every term, stopping at the first one that cannot be found."""
    resolved = [resolver.resolve(term) for term in terms if not is_metadata_file(term)]
    targets = dedupe_targets(resolved)
    return TargetSet(
        targets=targets,
        scan_extensions=scan_extensions_for(targets, search_binaries=search_binaries),
    )
