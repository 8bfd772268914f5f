"""Tests for feedback template rendering."""

import pytest

from speaking_grader.domain.models import Question
from speaking_grader.feedback import FeedbackRenderer, FeedbackTemplateError
from speaking_grader.matching import KeywordMatcher, build_feedback_context
from speaking_grader.review import PracticeSession, SessionSummary


@pytest.fixture
def renderer():
    """Create a FeedbackRenderer with the packaged templates."""
    return FeedbackRenderer()


@pytest.fixture
def question():
    return Question(
        id="q1",
        text="Do you often use a computer?",
        keywords=["computer", "use", "often"],
        optional_keywords=["daily", "work"],
    )


def _context(question, transcript):
    result = KeywordMatcher().evaluate(question.keywords, transcript, question.optional_keywords)
    return build_feedback_context(result, transcript=transcript, question=question)


class TestRenderAttempt:
    """Tests for FeedbackRenderer.render_attempt."""

    def test_excellent_feedback(self, renderer, question):
        output = renderer.render_attempt(
            _context(question, "I often use a computer for work.")
        )

        assert output.startswith("Excellent!\nOutstanding response with bonus vocabulary!\n")
        assert "Question q1: Do you often use a computer?" in output
        assert "I **often** **use** a **computer** for **work**." in output
        assert "Keyword score: 100%" in output
        assert "Matched Required Keywords (3):" in output
        assert "  + computer\n  + use\n  + often\n" in output
        assert "Bonus Keywords Found! (1):\n  * work\n" in output
        assert "Missing Required Keywords" not in output
        assert "Amazing work!" in output

    def test_incomplete_feedback(self, renderer, question):
        output = renderer.render_attempt(_context(question, "I like my computer"))

        assert output.startswith("Incomplete\nSome required keywords are missing\n")
        assert "Keyword score: 33%" in output
        assert "Missing Required Keywords (2):\n  - use\n  - often\n" in output
        assert "Bonus Keywords Found!" not in output
        assert "Keep practicing!" in output

    def test_without_question_or_transcript(self, renderer):
        result = KeywordMatcher().evaluate(["computer"], "computer")
        output = renderer.render_attempt(build_feedback_context(result))

        assert "Question" not in output
        assert "You said:" not in output
        assert "Keyword score: 100%" in output

    def test_missing_context_key(self, renderer):
        with pytest.raises(FeedbackTemplateError, match="Template rendering failed"):
            renderer.render_attempt({"headline": "Excellent!"})

    def test_missing_template(self):
        renderer = FeedbackRenderer(attempt_template="missing.txt.j2")

        with pytest.raises(FeedbackTemplateError):
            renderer.render_attempt({})


class TestRenderSummary:
    """Tests for FeedbackRenderer.render_summary."""

    def test_summary_with_attempts(self, renderer, computer_bank):
        session = PracticeSession(computer_bank)
        session.grade("c1", "I use a computer for work")
        session.grade("c2", "Students need them")

        output = renderer.render_summary(
            session.summary(), session.attempts, bank_name=computer_bank.name
        )

        assert output.startswith("Practice Review: Computers")
        assert "Score: 50% (1/2 correct)" in output
        assert "Excellent: 1  Good: 0  Incomplete: 1" in output
        assert "Average keyword score: 75%" in output
        assert "1. [excellent] c1 (100%)" in output
        assert '"I use a computer for work"' in output
        assert "2. [incomplete] c2 (50%)" in output
        assert "Missing: computer" in output
        assert "No attempts yet." not in output

    def test_summary_truncates_transcripts(self, renderer, computer_bank):
        session = PracticeSession(computer_bank)
        session.grade("c1", "I use a computer " * 20)

        output = renderer.render_summary(
            session.summary(), session.attempts, max_transcript_chars=30
        )

        assert '"I use a computer I use a..."' in output

    def test_empty_summary(self, renderer):
        output = renderer.render_summary(SessionSummary(), [])

        assert output.startswith("Practice Review\n")
        assert "Score: 0% (0/0 correct)" in output
        assert "No attempts yet." in output
