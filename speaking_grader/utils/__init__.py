"""Utility functions for text normalization, stemming, and highlighting."""

from .highlighting import highlight_keywords, truncate_text
from .text import (
    STEM_SUFFIXES,
    normalize_text,
    percentage,
    round_half_up,
    stem_word,
    tokenize,
)

__all__ = [
    # Text
    "STEM_SUFFIXES",
    "normalize_text",
    "stem_word",
    "tokenize",
    "round_half_up",
    "percentage",
    # Highlighting
    "highlight_keywords",
    "truncate_text",
]
