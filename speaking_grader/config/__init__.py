"""Configuration management module for the speaking grader."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    FeedbackConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    OutputFormat,
    QuestionBankConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "QuestionBankConfig",
    "FeedbackConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    "OutputFormat",
    # Exceptions
    "ConfigurationError",
]
