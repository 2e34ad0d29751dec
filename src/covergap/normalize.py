"""Normalization utilities."""

import re


_WHITESPACE_RE = re.compile(r"\s+")


def normalize_light(text: str) -> str:
    """Collapse whitespace runs and strip leading/trailing whitespace."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def excerpt(text: str, limit: int = 160) -> str:
    stripped = normalize_light(text)
    if len(stripped) <= limit:
        return stripped
    return stripped[: limit - 1] + "…"
