"""Plain-text feedback rendering for graded answers and sessions."""

from .renderer import FeedbackRenderer, FeedbackTemplateError

__all__ = ["FeedbackRenderer", "FeedbackTemplateError"]
