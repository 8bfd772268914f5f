"""Keyword matching engine for grading spoken answers.

This module implements the matching logic that:
1. Normalizes the transcript and each keyword
2. Decides keyword presence (substring first, then token/stem fallback)
3. Partitions required keywords into matched and missed
4. Rates correct answers as good or excellent using optional keywords
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from speaking_grader.logging import get_logger
from speaking_grader.utils.text import normalize_text, percentage, stem_word, tokenize

from .models import MatchQuality, MatchResult

logger = get_logger(__name__, component="matching")


@dataclass(frozen=True)
class PreparedTranscript:
    """Normalized transcript with token and stem lookups.

    Built once per evaluation so each keyword check is a set lookup
    rather than a rescan of the transcript.
    """

    normalized: str
    tokens: FrozenSet[str]
    stems: FrozenSet[str]

    @classmethod
    def from_text(cls, transcript: str) -> "PreparedTranscript":
        normalized = normalize_text(transcript)
        tokens = tokenize(normalized)
        return cls(
            normalized=normalized,
            tokens=frozenset(tokens),
            stems=frozenset(stem_word(token) for token in tokens),
        )

    def has_token(self, token: str) -> bool:
        """True if token appears verbatim or shares a stem with a transcript token."""
        return token in self.tokens or stem_word(token) in self.stems


class KeywordMatcher:
    """Evaluates transcripts against required and optional keywords.

    Responsibilities:
    - Decide presence of single- and multi-word keywords
    - Partition required keywords into matched/missed (input order kept)
    - Rate correct answers using optional keywords
    - Compute percentage scores

    The matcher holds no mutable state and may be shared between threads.
    """

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        """Initialize KeywordMatcher.

        Args:
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger

    def is_keyword_present(self, keyword: str, transcript: str) -> bool:
        """Check whether one keyword is present in a transcript.

        Args:
            keyword: Single- or multi-word keyword
            transcript: Raw transcript text

        Returns:
            True if the keyword is present
        """
        return self._is_present(keyword, PreparedTranscript.from_text(transcript))

    def evaluate(
        self,
        required_keywords: Sequence[str],
        transcript: str,
        optional_keywords: Optional[Sequence[str]] = None,
    ) -> MatchResult:
        """Evaluate an answer attempt against required and optional keywords.

        Algorithm:
        1. Check each required keyword in input order
        2. Correct if nothing was missed and at least one keyword was required
        3. For correct answers with optional keywords, collect optional hits
           and rate EXCELLENT (any hit) or GOOD (none)
        4. Otherwise leave quality and optional matches unset

        Args:
            required_keywords: Keywords that must all be present
            transcript: Raw transcript text
            optional_keywords: Bonus keywords (may be None or empty)

        Returns:
            MatchResult with the grading decision
        """
        prepared = PreparedTranscript.from_text(transcript)

        matched: List[str] = []
        missed: List[str] = []
        for keyword in required_keywords:
            if self._is_present(keyword, prepared):
                matched.append(keyword)
            else:
                missed.append(keyword)

        # No required keywords means nothing to grade, never "correct"
        is_correct = not missed and len(required_keywords) > 0

        quality: Optional[MatchQuality] = None
        matched_optional: Optional[List[str]] = None
        if is_correct and optional_keywords:
            matched_optional = [
                keyword for keyword in optional_keywords if self._is_present(keyword, prepared)
            ]
            quality = MatchQuality.EXCELLENT if matched_optional else MatchQuality.GOOD

        self.logger.debug(
            "Evaluated transcript",
            extra={
                "event": "matching.evaluated",
                "is_correct": is_correct,
                "quality": quality.value if quality else None,
                "required_matched": len(matched),
                "required_total": len(required_keywords),
                "optional_matched": len(matched_optional) if matched_optional is not None else None,
            },
        )

        return MatchResult(
            is_correct=is_correct,
            quality=quality,
            matched_keywords=tuple(matched),
            missed_keywords=tuple(missed),
            matched_optional_keywords=tuple(matched_optional) if matched_optional is not None else None,
        )

    def score(self, keywords: Sequence[str], transcript: str) -> int:
        """Percentage (0-100) of keywords present in the transcript.

        Returns 0 for an empty keyword list.
        """
        if not keywords:
            return 0
        result = self.evaluate(keywords, transcript)
        return percentage(len(result.matched_keywords), len(keywords))

    @staticmethod
    def _is_present(keyword: str, prepared: PreparedTranscript) -> bool:
        """Check a keyword against a prepared transcript.

        Uses substring matching on normalized text first, which also accepts
        hits inside longer words ("use" in "user"). Falls back to token and
        stem comparison; multi-word keywords need every word somewhere in the
        transcript, in any order.
        """
        normalized_keyword = normalize_text(keyword)
        if not normalized_keyword:
            return False

        if normalized_keyword in prepared.normalized:
            return True

        # Every single-word keyword is the one-token case of the same rule
        return all(prepared.has_token(token) for token in tokenize(normalized_keyword))


default_matcher = KeywordMatcher()


def match_keywords(
    required_keywords: Sequence[str],
    transcript: str,
    optional_keywords: Optional[Sequence[str]] = None,
) -> MatchResult:
    """Evaluate a transcript with the shared default matcher."""
    return default_matcher.evaluate(required_keywords, transcript, optional_keywords)


def get_keyword_match_score(keywords: Sequence[str], transcript: str) -> int:
    """Percentage score of keywords found, using the shared default matcher."""
    return default_matcher.score(keywords, transcript)
