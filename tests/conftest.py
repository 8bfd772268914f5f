"""Shared pytest fixtures."""

from pathlib import Path

import pytest

from speaking_grader.domain.models import Question, QuestionBank, QuestionType
from speaking_grader.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BANKS_DIR = FIXTURES_DIR / "banks"

ENV_VARS = ("LOG_LEVEL", "ENVIRONMENT", "QUESTION_BANK", "QUESTION_BANK_DIR")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove grader environment variables so tests see defaults."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def banks_dir() -> Path:
    return BANKS_DIR


@pytest.fixture
def computer_bank():
    """Small in-memory bank with one gradable and one ungradable question."""
    return QuestionBank(
        id="computers",
        name="Computers",
        description="Fixture bank",
        questions=[
            Question(
                id="c1",
                type=QuestionType.PART1,
                text="Do you use a computer?",
                keywords=["computer", "use"],
                optional_keywords=["daily", "work"],
            ),
            Question(
                id="c2",
                type=QuestionType.PART3,
                text="Why do students need computers?",
                keywords=["students", "computer"],
            ),
            Question(
                id="c3",
                type=QuestionType.PART1,
                text="Tell me anything.",
                keywords=[],
            ),
        ],
    )
