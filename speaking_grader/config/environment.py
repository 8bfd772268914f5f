"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        question_bank: Optional[str] = None,
        question_bank_dir: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.environment = environment or "local"
        self.question_bank = question_bank
        self.question_bank_dir = question_bank_dir


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label added to every log record (default: local)
    - QUESTION_BANK: Bank ID or path overriding the configured bank
    - QUESTION_BANK_DIR: Directory overriding the configured bank directory

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")
    question_bank = os.getenv("QUESTION_BANK")
    question_bank_dir = os.getenv("QUESTION_BANK_DIR")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if question_bank_dir is not None and not question_bank_dir.strip():
        errors.append("QUESTION_BANK_DIR is set but empty")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level or None,
        environment=environment,
        question_bank=question_bank.strip() if question_bank and question_bank.strip() else None,
        question_bank_dir=question_bank_dir.strip() if question_bank_dir else None,
    )
