"""Data models for the matching engine.

This module defines the immutable result of grading one transcript against
a set of required and optional keywords.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from speaking_grader.utils.text import percentage


class MatchQuality(str, Enum):
    """Quality rating of a correct answer."""

    GOOD = "good"
    EXCELLENT = "excellent"


@dataclass(frozen=True)
class MatchResult:
    """Result of evaluating a transcript against keyword rules.

    matched_keywords and missed_keywords partition the required keywords,
    each preserving input order. quality and matched_optional_keywords are
    None (not empty) when the answer is incorrect or no optional keywords
    were configured; callers use that to tell "nothing to award" apart
    from "configured but nothing matched".

    Attributes:
        is_correct: True if every required keyword was found (and there was at least one)
        quality: GOOD or EXCELLENT for correct answers with optional keywords configured
        matched_keywords: Required keywords found in the transcript
        missed_keywords: Required keywords not found in the transcript
        matched_optional_keywords: Optional keywords found (only evaluated for correct answers)
    """

    is_correct: bool
    quality: Optional[MatchQuality] = None
    matched_keywords: Tuple[str, ...] = ()
    missed_keywords: Tuple[str, ...] = ()
    matched_optional_keywords: Optional[Tuple[str, ...]] = None

    @property
    def required_count(self) -> int:
        """Number of required keywords that were evaluated."""
        return len(self.matched_keywords) + len(self.missed_keywords)

    @property
    def score(self) -> int:
        """Percentage (0-100) of required keywords that matched."""
        return percentage(len(self.matched_keywords), self.required_count)

    @property
    def rating(self) -> str:
        """Return a description of answer quality.

        Returns:
            "excellent" if correct with bonus vocabulary,
            "good" if correct (with or without optional keywords configured),
            "incomplete" otherwise
        """
        if not self.is_correct:
            return "incomplete"
        if self.quality == MatchQuality.EXCELLENT:
            return "excellent"
        return "good"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the external result contract.

        Keys are camelCase. quality and matchedOptionalKeywords are omitted
        entirely when unset.
        """
        payload: Dict[str, Any] = {
            "isCorrect": self.is_correct,
            "matchedKeywords": list(self.matched_keywords),
            "missedKeywords": list(self.missed_keywords),
        }
        if self.quality is not None:
            payload["quality"] = self.quality.value
        if self.matched_optional_keywords is not None:
            payload["matchedOptionalKeywords"] = list(self.matched_optional_keywords)
        return payload
