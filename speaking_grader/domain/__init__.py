"""Domain models for questions and question banks."""

from .models import Question, QuestionBank, QuestionCard, QuestionType

__all__ = ["Question", "QuestionBank", "QuestionCard", "QuestionType"]
