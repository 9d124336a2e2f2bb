"""Text helpers for whole-word matching."""

from __future__ import annotations

import re
from functools import lru_cache


@lru_cache(maxsize=1024)
def word_pattern(word: str) -> re.Pattern[str]:
    r"""Compile a pattern matching ``word`` only when no word character touches it.

    Lookarounds rather than ``\b`` so names ending in punctuation, such as
    ``Enemy (1)``, still match.
    """
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)")


def contains_word(text: str, word: str) -> bool:
    """Return True when ``word`` occurs in ``text`` as a distinct word.

    ``Bar`` is found in ``"load(Bar)"`` but not in ``"FooBar"``.
    """
    if not word or word not in text:
        return False
    return word_pattern(word).search(text) is not None
