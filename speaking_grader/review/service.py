"""Practice session service for grading attempts against a question bank.

This module implements the session logic that:
1. Looks up the answered question in the bank
2. Grades the transcript with the keyword matcher
3. Records graded attempts in memory for review
4. Summarizes the session for the review screen
"""

import logging
from typing import Iterable, List, Optional

from speaking_grader.domain.models import Question, QuestionBank
from speaking_grader.logging import get_logger
from speaking_grader.logging.context import log_context
from speaking_grader.matching.engine import KeywordMatcher
from speaking_grader.matching.utils import build_rationale_dict
from speaking_grader.utils.text import percentage, round_half_up

from .models import GradedAttempt, SessionSummary

logger = get_logger(__name__, component="session")


class QuestionNotFoundError(KeyError):
    """Raised when an attempt references a question the bank does not contain."""

    def __init__(self, question_id: str, bank_id: str):
        self.question_id = question_id
        self.bank_id = bank_id
        super().__init__(question_id)

    def __str__(self) -> str:
        return f"Question '{self.question_id}' not found in bank '{self.bank_id}'"


def summarize_attempts(attempts: Iterable[GradedAttempt]) -> SessionSummary:
    """
    Aggregate graded attempts into a session summary.

    Args:
        attempts: Graded attempts in any order

    Returns:
        SessionSummary (all zeros for no attempts)
    """
    attempts = list(attempts)
    if not attempts:
        return SessionSummary()

    correct = [a for a in attempts if a.is_correct]
    excellent = [a for a in correct if a.result.rating == "excellent"]

    return SessionSummary(
        total_attempts=len(attempts),
        correct_count=len(correct),
        excellent_count=len(excellent),
        good_count=len(correct) - len(excellent),
        score_percentage=percentage(len(correct), len(attempts)),
        average_keyword_score=round_half_up(
            sum(a.result.score for a in attempts) / len(attempts)
        ),
    )


class PracticeSession:
    """Grades and records answers to the questions of one bank.

    Responsibilities:
    - Resolve question IDs against the bank
    - Grade transcripts with the question's required/optional keywords
    - Keep graded attempts in memory (nothing is persisted)
    - Provide the review summary
    """

    def __init__(
        self,
        bank: QuestionBank,
        matcher: Optional[KeywordMatcher] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize PracticeSession.

        Args:
            bank: Question bank being practised
            matcher: KeywordMatcher to grade with (a new one by default)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.bank = bank
        self.matcher = matcher or KeywordMatcher()
        self.logger = logger_instance or logger
        self._attempts: List[GradedAttempt] = []

    def get_question(self, question_id: str) -> Question:
        """Return the question or raise QuestionNotFoundError."""
        question = self.bank.get_question(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id, self.bank.id)
        return question

    def grade(
        self, question_id: str, transcript: str, duration_seconds: float = 0.0
    ) -> GradedAttempt:
        """Grade a transcript as an answer to one question and record it.

        Args:
            question_id: ID of the answered question
            transcript: Speech-to-text output for the answer
            duration_seconds: Length of the recording

        Returns:
            The recorded GradedAttempt

        Raises:
            QuestionNotFoundError: If the bank has no such question
        """
        question = self.get_question(question_id)

        with log_context(bank_id=self.bank.id, question_id=question.id):
            result = self.matcher.evaluate(
                question.keywords, transcript, question.optional_keywords
            )
            attempt = GradedAttempt(
                question_id=question.id,
                transcript=transcript,
                result=result,
                duration_seconds=duration_seconds,
            )
            self._attempts.append(attempt)

            self.logger.info(
                f"Attempt graded: {result.rating}",
                extra={
                    "event": "session.attempt.graded",
                    "attempt_number": len(self._attempts),
                    **build_rationale_dict(result),
                },
            )

        return attempt

    @property
    def attempts(self) -> List[GradedAttempt]:
        """Graded attempts in the order they were made."""
        return list(self._attempts)

    def attempts_for(self, question_id: str) -> List[GradedAttempt]:
        return [a for a in self._attempts if a.question_id == question_id]

    def summary(self) -> SessionSummary:
        """Summarize all attempts made so far."""
        return summarize_attempts(self._attempts)

    def reset(self) -> None:
        """Forget all recorded attempts."""
        self._attempts.clear()
