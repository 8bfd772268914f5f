"""Template rendering for answer feedback using Jinja2.

This module wraps Jinja2 template rendering with caching and strict
undefined checking to catch template errors early.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from speaking_grader.review.models import GradedAttempt, SessionSummary
from speaking_grader.utils.highlighting import truncate_text

logger = logging.getLogger(__name__)


class FeedbackTemplateError(Exception):
    """Raised when a feedback template fails to render."""


class FeedbackRenderer:
    """Renders plain-text feedback from templates.

    Provides methods to render the verdict for a single attempt and the
    review summary for a session from template files in the
    speaking_grader.feedback.templates package directory.

    Templates are cached by the Jinja2 environment for reuse.
    """

    def __init__(
        self,
        template_dir: str = "templates",
        attempt_template: str = "attempt_feedback.txt.j2",
        summary_template: str = "session_summary.txt.j2",
    ):
        """Initialize renderer with a Jinja2 environment.

        Args:
            template_dir: Directory name within the speaking_grader.feedback package
            attempt_template: Filename of the single-attempt template
            summary_template: Filename of the session summary template
        """
        self.attempt_template_name = attempt_template
        self.summary_template_name = summary_template

        # Plain text output, so no HTML escaping
        self.env = Environment(
            loader=PackageLoader("speaking_grader.feedback", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        logger.debug(f"Initialized FeedbackRenderer with templates from {template_dir}")

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise FeedbackTemplateError(error_msg) from e

    def render_attempt(self, context: Dict[str, Any]) -> str:
        """Render feedback for one attempt.

        Args:
            context: Dict from matching.utils.build_feedback_context()

        Returns:
            Rendered plain text

        Raises:
            FeedbackTemplateError: If template rendering fails
        """
        return self._render(self.attempt_template_name, context)

    def render_summary(
        self,
        summary: SessionSummary,
        attempts: Iterable[GradedAttempt],
        bank_name: Optional[str] = None,
        max_transcript_chars: int = 80,
    ) -> str:
        """Render the review summary for a session.

        Args:
            summary: Aggregated session results
            attempts: Attempts to list under the summary
            bank_name: Optional bank name for the heading
            max_transcript_chars: Transcript length shown per attempt

        Returns:
            Rendered plain text

        Raises:
            FeedbackTemplateError: If template rendering fails
        """
        rows = [
            {
                "question_id": attempt.question_id,
                "rating": attempt.result.rating,
                "score": attempt.result.score,
                "missed_keywords": list(attempt.result.missed_keywords),
                "transcript": truncate_text(attempt.transcript.strip(), max_length=max_transcript_chars),
            }
            for attempt in attempts
        ]
        context = {
            "bank_name": bank_name or "",
            "summary": asdict(summary),
            "incorrect_count": summary.incorrect_count,
            "attempts": rows,
        }
        return self._render(self.summary_template_name, context)
