"""Core domain models for practice questions and question banks.

This module defines the data structures used throughout the application:
- QuestionType: speaking test part a question belongs to
- QuestionCard: cue card shown for long-turn questions
- Question: prompt plus required/optional keywords used for grading
- QuestionBank: named collection of questions

Models accept the camelCase field names used by JSON question bank files
as well as snake_case names.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class QuestionType(str, Enum):
    """Speaking test parts."""

    PART1 = "part1"
    PART2 = "part2"
    PART3 = "part3"


def _clean_keywords(keywords: List[str]) -> List[str]:
    """Strip keywords and drop blank entries; casing and duplicates are kept."""
    cleaned = []
    for keyword in keywords:
        stripped = keyword.strip()
        if stripped:
            cleaned.append(stripped)
    return cleaned


class QuestionCard(BaseModel):
    """Cue card content shown alongside a long-turn question."""

    title: str = Field(..., min_length=1, description="Card title")
    subtitle: Optional[str] = Field(None, description="Optional card subtitle")
    bullets: List[str] = Field(default_factory=list, description="Points to cover")


class Question(BaseModel):
    """A practice prompt with the vocabulary used to grade answers."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    id: str = Field(..., description="Question ID, unique within its bank")
    type: QuestionType = Field(QuestionType.PART1, description="Speaking test part")
    text: str = Field(..., description="Prompt displayed to the learner")
    keywords: List[str] = Field(
        default_factory=list, description="Required keywords that must be present"
    )
    optional_keywords: Optional[List[str]] = Field(
        None,
        alias="optionalKeywords",
        description="Bonus keywords for an excellent rating",
    )
    media: Optional[str] = Field(None, description="Optional audio/video URL")
    card: Optional[QuestionCard] = Field(None, description="Optional cue card")

    @field_validator("id", "text")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, v: List[str]) -> List[str]:
        return _clean_keywords(v)

    @field_validator("optional_keywords")
    @classmethod
    def clean_optional_keywords(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return _clean_keywords(v)

    @property
    def is_gradable(self) -> bool:
        """Whether an answer to this question can ever be marked correct."""
        return bool(self.keywords)


class QuestionBank(BaseModel):
    """A named collection of practice questions."""

    id: str = Field(..., description="Bank ID used to select the bank")
    name: str = Field(..., description="Human-readable bank name")
    description: str = Field("", description="Short description of the bank")
    author: Optional[str] = Field(None, description="Bank author")
    version: Optional[str] = Field(None, description="Bank version")
    questions: List[Question] = Field(default_factory=list, description="Questions in order")

    @field_validator("id", "name")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def validate_unique_question_ids(self):
        """Reject banks that reuse a question ID."""
        seen = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id: {question.id}")
            seen.add(question.id)
        return self

    def get_question(self, question_id: str) -> Optional[Question]:
        """Get a question by its ID."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @property
    def question_ids(self) -> List[str]:
        return [question.id for question in self.questions]
