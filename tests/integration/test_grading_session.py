"""Integration tests for the grading flow.

Tests the complete flow from bank files on disk through bank resolution,
session grading, feedback rendering and the review summary.
"""

from pathlib import Path

import pytest

from speaking_grader.feedback import FeedbackRenderer
from speaking_grader.matching import build_feedback_context
from speaking_grader.question_banks import list_available_banks, resolve_question_bank
from speaking_grader.review import PracticeSession

QUESTION_BANK_DIR = Path(__file__).resolve().parents[2] / "question-banks"


@pytest.fixture
def technology_session():
    """Create a session over the bundled technology bank."""
    resolution = resolve_question_bank(
        "technology", bank_dir=QUESTION_BANK_DIR, fallback_to_default=False
    )
    return PracticeSession(resolution.bank)


def test_bundled_banks_listed():
    """Test the bundled manifest lists every bank file."""
    banks = list_available_banks(QUESTION_BANK_DIR)

    assert [bank.id for bank in banks] == ["wk1", "technology", "environment", "education"]
    assert all(question.is_gradable for bank in banks for question in bank.questions)


def test_practice_session_end_to_end(technology_session):
    """Test grading several answers and reviewing the session."""
    first = technology_session.grade("tech1", "I use technology every day, often for work")
    second = technology_session.grade("tech1", "I use technology daily, quite frequently")
    third = technology_session.grade(
        "tech4", "Technology helps people communicate on social media"
    )

    assert first.result.missed_keywords == ("daily",)
    assert first.result.matched_optional_keywords is None
    assert second.result.rating == "excellent"
    assert second.result.matched_optional_keywords == ("frequently",)
    assert third.result.matched_optional_keywords == ("social media",)

    summary = technology_session.summary()
    assert summary.total_attempts == 3
    assert summary.correct_count == 2
    assert summary.score_percentage == 67
    assert summary.average_keyword_score == 83

    renderer = FeedbackRenderer()
    review = renderer.render_summary(
        summary, technology_session.attempts, bank_name=technology_session.bank.name
    )
    assert review.startswith("Practice Review: Technology")
    assert "Score: 67% (2/3 correct)" in review
    assert "1. [incomplete] tech1 (50%)" in review
    assert "Missing: daily" in review

    question = technology_session.get_question("tech4")
    feedback = renderer.render_attempt(
        build_feedback_context(third.result, transcript=third.transcript, question=question)
    )
    assert feedback.startswith("Excellent!")
    assert "Bonus Keywords Found! (1):\n  * social media\n" in feedback
    assert "**social** **media**" in feedback


def test_yaml_bank_with_multi_word_keywords():
    """Test a YAML bank using camelCase keys and multi-word keywords."""
    resolution = resolve_question_bank("environment", bank_dir=QUESTION_BANK_DIR)
    session = PracticeSession(resolution.bank)

    attempt = session.grade("env2", "The government should tackle air pollution")

    assert resolution.used_fallback is False
    assert attempt.result.matched_keywords == ("government", "air pollution")
    assert attempt.result.rating == "good"
    assert attempt.result.matched_optional_keywords == ()


def test_education_bank_without_optional_keywords():
    """Test a bank whose questions only list required keywords."""
    resolution = resolve_question_bank(
        "education", bank_dir=QUESTION_BANK_DIR, fallback_to_default=False
    )
    session = PracticeSession(resolution.bank)

    full = session.grade(
        "edu2", "Education is important because learning gives us knowledge, that is why."
    )
    partial = session.grade("edu2", "Education is important")

    assert len(resolution.bank.questions) == 5
    assert full.result.rating == "good"
    assert full.result.quality is None
    assert partial.result.missed_keywords == ("why", "because", "learning", "knowledge")
    assert partial.result.score == 33
