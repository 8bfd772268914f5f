"""Text normalization and lightweight stemming for keyword matching.

Speech-to-text output is noisy: casing varies, punctuation is inserted
inconsistently ("don't," vs "dont") and inflections differ from the
vocabulary a question asks for. These helpers reduce that noise to a
canonical form the matching engine can compare.
"""

import math
import re
from typing import List

# Tried in order; only the first applicable suffix is stripped.
STEM_SUFFIXES = ("ing", "ed", "es", "s", "ly", "er", "est")

# Shortest stem left behind after stripping a suffix.
MIN_STEM_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize text for keyword comparison.

    Normalization steps:
    - Convert to lowercase
    - Replace every non-word, non-whitespace character with a space
    - Collapse runs of whitespace to a single space
    - Strip leading/trailing whitespace

    Args:
        text: Text to normalize

    Returns:
        Normalized text (empty string for empty input)

    Example:
        >>> normalize_text("  I don't use it, daily!  ")
        'i don t use it daily'
    """
    if not text:
        return ""

    normalized = _NON_WORD.sub(" ", text.lower())
    normalized = _WHITESPACE.sub(" ", normalized)

    return normalized.strip()


def stem_word(word: str) -> str:
    """Strip at most one common English suffix from a word.

    This is a crude suffix table, not a linguistic stemmer. A suffix is
    only removed when at least three characters remain.

    Args:
        word: Single word to stem

    Returns:
        Lowercased word with the first applicable suffix removed

    Example:
        >>> stem_word("computers")
        'computer'
        >>> stem_word("using")
        'using'
        >>> stem_word("use")
        'use'
    """
    lower_word = word.lower()

    for suffix in STEM_SUFFIXES:
        if lower_word.endswith(suffix) and len(lower_word) >= len(suffix) + MIN_STEM_LENGTH:
            return lower_word[: -len(suffix)]

    return lower_word


def tokenize(normalized_text: str) -> List[str]:
    """Split already-normalized text into word tokens."""
    return normalized_text.split()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's round() uses banker's rounding (round(12.5) == 12); scores
    are expected to round 12.5 to 13.
    """
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Integer percentage of part over total, 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up((part / total) * 100)
