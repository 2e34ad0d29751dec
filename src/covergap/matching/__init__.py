"""Lexical requirement/test matching."""

from covergap.matching.keywords import STOP_WORDS, extract_keywords
from covergap.matching.matcher import covers

__all__ = ["STOP_WORDS", "covers", "extract_keywords"]
