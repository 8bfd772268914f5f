"""Utility functions for preparing match results for downstream consumers.

This module provides helpers for building the feedback shown after an
answer attempt and structuring match rationale for logs.
"""

from typing import Any, Dict, List, Optional

from speaking_grader.domain.models import Question
from speaking_grader.utils.highlighting import highlight_keywords, truncate_text

from .models import MatchResult

HEADLINES = {
    "excellent": "Excellent!",
    "good": "Good Job!",
    "incomplete": "Incomplete",
}

MESSAGES = {
    "excellent": "Outstanding response with bonus vocabulary!",
    "good": "All required keywords included!",
    "incomplete": "Some required keywords are missing",
}


def encouragement_for(result: MatchResult) -> str:
    """Pick the closing encouragement line for a result."""
    if result.rating == "excellent":
        return "Amazing work! You're using advanced vocabulary!"
    if result.rating == "good" and result.quality is not None:
        return "Great job! Try including bonus keywords next time for an excellent rating!"
    if result.is_correct:
        return "Great job! You covered every required keyword."
    return "Keep practicing! Try to include all the required keywords."


def build_feedback_context(
    result: MatchResult,
    transcript: str = "",
    question: Optional[Question] = None,
    marker_start: str = "**",
    marker_end: str = "**",
    max_transcript_chars: int = 500,
) -> Dict[str, Any]:
    """Build the template context for rendering answer feedback.

    Args:
        result: MatchResult from keyword matching
        transcript: Transcript that was graded (may be empty)
        question: Question that was answered, if known
        marker_start: Marker placed before highlighted words
        marker_end: Marker placed after highlighted words
        max_transcript_chars: Transcript length limit for display

    Returns:
        Dict with keys:
        - rating: "excellent", "good" or "incomplete"
        - headline: Verdict title
        - message: One-line explanation of the verdict
        - encouragement: Closing line
        - is_correct, quality, score
        - matched_keywords, missed_keywords, matched_optional_keywords (lists)
        - question_id, question_text (empty when no question given)
        - transcript: Truncated original transcript
        - highlighted_transcript: Truncated transcript with matched words marked
    """
    matched_optional = list(result.matched_optional_keywords or [])
    highlight_terms = list(result.matched_keywords) + matched_optional

    display_transcript = truncate_text(transcript.strip(), max_length=max_transcript_chars)
    highlighted = highlight_keywords(
        display_transcript, highlight_terms, marker_start=marker_start, marker_end=marker_end
    )

    rating = result.rating
    return {
        "rating": rating,
        "headline": HEADLINES[rating],
        "message": MESSAGES[rating],
        "encouragement": encouragement_for(result),
        "is_correct": result.is_correct,
        "quality": result.quality.value if result.quality else None,
        "score": result.score,
        "matched_keywords": list(result.matched_keywords),
        "missed_keywords": list(result.missed_keywords),
        "matched_optional_keywords": matched_optional,
        "question_id": question.id if question else "",
        "question_text": question.text if question else "",
        "transcript": display_transcript,
        "highlighted_transcript": highlighted,
    }


def build_rationale_dict(result: MatchResult) -> Dict[str, Any]:
    """Build a lightweight rationale dict for a match result.

    Useful for logging alongside graded attempts.

    Args:
        result: MatchResult to summarize

    Returns:
        Dict with match tracking information:
        - is_correct: Whether the answer is correct
        - rating: excellent/good/incomplete
        - matched_required_count / required_total
        - missed_keywords: Required keywords not found
        - optional_matched_count: Count of optional hits (None when not evaluated)
        - score: Percentage of required keywords found
    """
    optional: Optional[List[str]] = (
        list(result.matched_optional_keywords)
        if result.matched_optional_keywords is not None
        else None
    )
    return {
        "is_correct": result.is_correct,
        "rating": result.rating,
        "matched_required_count": len(result.matched_keywords),
        "required_total": result.required_count,
        "missed_keywords": list(result.missed_keywords),
        "optional_matched_count": len(optional) if optional is not None else None,
        "score": result.score,
    }
