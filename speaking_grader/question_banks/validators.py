"""Non-fatal checks for question bank content."""

from typing import List

from speaking_grader.domain.models import QuestionBank
from speaking_grader.utils.text import normalize_text


def check_bank_warnings(bank: QuestionBank) -> List[str]:
    """
    Check a question bank for content that will grade unexpectedly.

    Args:
        bank: Validated question bank

    Returns:
        List of warning messages
    """
    warning_messages = []

    for question in bank.questions:
        # Answers to these can never be marked correct
        if not question.keywords:
            warning_messages.append(
                f"Question '{question.id}' has no required keywords and can never be graded correct"
            )
            continue

        normalized = [normalize_text(keyword) for keyword in question.keywords]
        duplicates = sorted({kw for kw in normalized if normalized.count(kw) > 1})
        if duplicates:
            warning_messages.append(
                f"Question '{question.id}' repeats required keywords: {', '.join(duplicates)}"
            )

        if question.optional_keywords:
            overlap = sorted(
                set(normalized) & {normalize_text(kw) for kw in question.optional_keywords}
            )
            if overlap:
                warning_messages.append(
                    f"Question '{question.id}' lists keywords as both required and optional: "
                    f"{', '.join(overlap)}"
                )

    return warning_messages
