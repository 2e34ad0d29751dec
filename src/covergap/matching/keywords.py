"""Keyword extraction for lexical matching."""

from __future__ import annotations

import re
from typing import FrozenSet

_PUNCT_RE = re.compile(r"[^\w\s]")

MIN_KEYWORD_LENGTH = 4

STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "the",
        "a",
        "an",
        "and",
        "or",
        "but",
        "in",
        "on",
        "at",
        "to",
        "for",
    }
)


def extract_keywords(text: str) -> FrozenSet[str]:
    """Return the significant lower-cased tokens of ``text``.

    Punctuation is removed, tokens shorter than four characters and stop words
    are dropped, and duplicates collapse into one keyword.
    """
    if not text:
        return frozenset()
    words = _PUNCT_RE.sub("", text.lower()).split()
    return frozenset(
        word for word in words if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    )
