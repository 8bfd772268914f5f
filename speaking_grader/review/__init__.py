"""Practice session grading and review summaries."""

from .models import GradedAttempt, SessionSummary
from .service import PracticeSession, QuestionNotFoundError, summarize_attempts

__all__ = [
    "GradedAttempt",
    "SessionSummary",
    "PracticeSession",
    "QuestionNotFoundError",
    "summarize_attempts",
]
