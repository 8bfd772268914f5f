"""Keyword highlighting utilities for answer feedback.

This module provides utilities for highlighting matched vocabulary in a
transcript so learners can see which of their words counted towards the
answer.
"""

import re
from typing import Iterable, Set, Tuple

from .text import normalize_text, stem_word

_WORD = re.compile(r"\w+")


def _keyword_vocabulary(keywords: Iterable[str]) -> Tuple[Set[str], Set[str]]:
    """Collect the normalized tokens of all keywords and, separately, their stems."""
    tokens: Set[str] = set()
    stems: Set[str] = set()
    for keyword in keywords:
        for token in normalize_text(keyword).split():
            tokens.add(token)
            stems.add(stem_word(token))
    return tokens, stems


def highlight_keywords(
    text: str, keywords: Iterable[str], marker_start: str = "**", marker_end: str = "**"
) -> str:
    """Highlight keyword words in text by wrapping them with markers.

    A word is highlighted when its lowercase form equals a keyword token,
    or its stem equals the stem of a keyword token. This is the same test
    the matching engine applies per token. Matching is word by word,
    so multi-word keywords highlight each of their words wherever they
    appear. Original casing and punctuation are preserved.

    Args:
        text: Text to highlight keywords in
        keywords: Keywords/phrases whose words should be highlighted
        marker_start: Marker to insert before a highlighted word (default: **)
        marker_end: Marker to insert after a highlighted word (default: **)

    Returns:
        Text with keyword words wrapped in markers

    Example:
        >>> highlight_keywords("I use computers daily.", ["computers", "use"])
        'I **use** **computers** daily.'
    """
    if not text:
        return text

    tokens, stems = _keyword_vocabulary(keywords)
    if not tokens:
        return text

    def _wrap(match: "re.Match[str]") -> str:
        word = match.group(0)
        lower_word = word.lower()
        if lower_word in tokens or stem_word(lower_word) in stems:
            return f"{marker_start}{word}{marker_end}"
        return word

    return _WORD.sub(_wrap, text)


def truncate_text(text: str, max_length: int = 500, suffix: str = "...") -> str:
    """Truncate text to maximum length, adding suffix if truncated.

    Tries to break at word boundaries for cleaner truncation.

    Args:
        text: Text to truncate
        max_length: Maximum length (including suffix)
        suffix: Suffix to add if truncated (default: ...)

    Returns:
        Truncated text with suffix if needed

    Example:
        >>> truncate_text("This is a very long text that needs truncating", max_length=30)
        'This is a very long text...'
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)

    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]

    # Only break at a space if it is not too far back
    last_space = truncated.rfind(" ")
    if last_space > truncate_at * 0.8:
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix
