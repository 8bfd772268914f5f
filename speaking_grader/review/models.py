"""Data models for practice session tracking and review."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from speaking_grader.matching.models import MatchQuality, MatchResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GradedAttempt:
    """
    One graded answer to a question.

    Attributes:
        question_id: ID of the question that was answered
        transcript: Transcript that was graded
        result: Matching outcome
        duration_seconds: Length of the spoken answer
        recorded_at: UTC timestamp when the attempt was graded
    """

    question_id: str
    transcript: str
    result: MatchResult
    duration_seconds: float = 0.0
    recorded_at: datetime = field(default_factory=_utc_now)

    @property
    def is_correct(self) -> bool:
        return self.result.is_correct

    @property
    def quality(self) -> Optional[MatchQuality]:
        return self.result.quality


@dataclass
class SessionSummary:
    """
    Aggregate results for a practice session.

    Attributes:
        total_attempts: Number of graded attempts
        correct_count: Attempts with every required keyword present
        excellent_count: Correct attempts rated excellent
        good_count: Correct attempts rated good (including those with no optional keywords)
        score_percentage: correct_count / total_attempts as a 0-100 integer
        average_keyword_score: Mean per-attempt keyword score as a 0-100 integer
    """

    total_attempts: int = 0
    correct_count: int = 0
    excellent_count: int = 0
    good_count: int = 0
    score_percentage: int = 0
    average_keyword_score: int = 0

    @property
    def incorrect_count(self) -> int:
        return self.total_attempts - self.correct_count
