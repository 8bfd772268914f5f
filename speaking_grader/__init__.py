"""Keyword-based grading for spoken practice answers."""

__version__ = "1.0.0"
