"""Custom exceptions for question bank loading."""

from speaking_grader.config.exceptions import ConfigurationError


class QuestionBankError(ConfigurationError):
    """
    Exception raised when a question bank cannot be read or validated.

    Question banks are user-supplied data files, so this shares the
    error/suggestion formatting of ConfigurationError and is caught
    wherever configuration errors are.
    """
