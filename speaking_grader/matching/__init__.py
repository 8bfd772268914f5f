"""Keyword matching engine for grading spoken answers.

This module provides:
- MatchResult: Immutable result of evaluating a transcript
- MatchQuality: good/excellent rating for correct answers
- KeywordMatcher: Service to evaluate transcripts against keywords
- match_keywords / get_keyword_match_score: Shared-matcher shortcuts
- Utility functions for building feedback and rationale dicts
"""

from .engine import KeywordMatcher, get_keyword_match_score, match_keywords
from .models import MatchQuality, MatchResult
from .utils import build_feedback_context, build_rationale_dict

__all__ = [
    "KeywordMatcher",
    "MatchQuality",
    "MatchResult",
    "match_keywords",
    "get_keyword_match_score",
    "build_feedback_context",
    "build_rationale_dict",
]
