"""Resolution of search terms to concrete asset files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from assetrefs.models import TargetDescriptor
from assetrefs.resolve.metadata import read_metadata
from assetrefs.utils.files import METADATA_SUFFIX, SCENE_SUFFIX

LOGGER = logging.getLogger(__name__)

CODE_EXTENSIONS = (".cs", ".js")
RESOURCES_DIR_NAME = "Resources"
PREFIX_BONUS = 4

CorpusLister = Callable[[Path], Iterable[Path]]


class ReferentNotFound(LookupError):
    """Raised when a search term matches no file in the asset tree."""

    def __init__(self, term: str) -> None:
        super().__init__(f"Not found: {term}")
        self.term = term


def is_probably_code(term: str) -> bool:
    """Terms naming a script, or bare names without an extension."""
    lowered = term.lower()
    return lowered.endswith(CODE_EXTENSIONS) or "." not in term


def is_named_resource_path(path: Path) -> bool:
    return RESOURCES_DIR_NAME in Path(path).parts[:-1]


def _is_candidate(relative: str, term: str) -> bool:
    lowered = relative.lower()
    return (
        not lowered.endswith(METADATA_SUFFIX)
        and not lowered.endswith(SCENE_SUFFIX)
        and term.lower().replace("\\", "/") in lowered
    )


def collect_candidates(
    term: str,
    search_dir: Path,
    lister: CorpusLister,
    *,
    match_root: Optional[Path] = None,
) -> dict[str, Path]:
    """Map file name to path for every file under ``search_dir`` matching ``term``.

    The term is matched against each path relative to ``match_root``
    (``search_dir`` by default). When two files share a name the one listed
    last wins.
    """
    root = match_root if match_root is not None else search_dir
    candidates: dict[str, Path] = {}
    for file_path in lister(search_dir):
        relative = os.path.relpath(file_path, root).replace("\\", "/")
        if _is_candidate(relative, term):
            candidates[Path(file_path).name] = Path(file_path)
            LOGGER.debug("Matches:  %s  --  %s", Path(file_path).name, file_path)
    return candidates


def score_candidate(name: str, term: str) -> int:
    """Shorter names score better; names starting with the term get a bonus."""
    score = len(name)
    if name.startswith(term):
        score -= PREFIX_BONUS
    return score


def best_candidate(candidates: dict[str, Path], term: str) -> Optional[Path]:
    best_match: Optional[Path] = None
    best_score: Optional[int] = None
    for name, path in candidates.items():
        score = score_candidate(name, term)
        if best_score is None or score < best_score:
            best_score = score
            best_match = path
    return best_match


def find_matching_file(
    term: str,
    search_dir: Path,
    lister: CorpusLister,
    *,
    match_root: Optional[Path] = None,
) -> Optional[Path]:
    """Return the file under ``search_dir`` that best matches ``term``.

    A term that is itself an existing file is returned as-is.
    """
    if Path(term).is_file():
        return Path(term)
    if not Path(search_dir).is_dir():
        return None
    candidates = collect_candidates(term, search_dir, lister, match_root=match_root)
    return best_candidate(candidates, term)


class ReferentResolver:
    """Turns raw search terms into target descriptors."""

    def __init__(
        self,
        assets_dir: Path,
        lister: CorpusLister,
        *,
        scripts_dir: Path | None = None,
    ) -> None:
        self.assets_dir = Path(assets_dir)
        self.scripts_dir = Path(scripts_dir) if scripts_dir is not None else None
        self.lister = lister

    @property
    def project_dir(self) -> Path:
        """Directory holding Assets/, so terms may start with ``Assets/``."""
        return self.assets_dir.parent

    def locate(self, term: str) -> Path:
        match: Optional[Path] = None
        if is_probably_code(term) and self.scripts_dir is not None:
            match = find_matching_file(term, self.scripts_dir, self.lister, match_root=self.project_dir)
        if match is None:
            match = find_matching_file(term, self.assets_dir, self.lister, match_root=self.project_dir)
        if match is None:
            raise ReferentNotFound(term)
        return match.resolve()

    def resolve(self, term: str) -> TargetDescriptor:
        path = self.locate(term)
        metadata = read_metadata(path)
        descriptor = TargetDescriptor(
            path=path,
            identifier=metadata.identifier,
            is_code_target=path.suffix.lower() in CODE_EXTENSIONS,
            is_named_resource=is_named_resource_path(path) or metadata.is_bundled,
        )
        LOGGER.info("Resolved %r to %s", term, path)
        return descriptor
