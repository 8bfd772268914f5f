"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class OutputFormat(str, Enum):
    """Grading result output formats."""

    TEXT = "text"
    JSON = "json"


class QuestionBankConfig(BaseModel):
    """Which question bank to practise with and where banks live."""

    bank: str = Field("default", description="Bank ID or path to a bank file")
    directory: str = Field(
        "question-banks", min_length=1, description="Directory holding <bank-id>.json files"
    )
    fallback_to_default: bool = Field(
        True, description="Use the built-in bank when the requested bank cannot be loaded"
    )

    @field_validator("bank", "directory")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        return v.strip()

    @field_validator("bank")
    @classmethod
    def default_when_blank(cls, v: str) -> str:
        return v or "default"

    @field_validator("directory")
    @classmethod
    def directory_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field cannot be empty or whitespace-only")
        return v


class FeedbackConfig(BaseModel):
    """How grading results are presented."""

    output_format: OutputFormat = Field(OutputFormat.TEXT, description="text or json")
    highlight_marker_start: str = Field("**", description="Inserted before highlighted words")
    highlight_marker_end: str = Field("**", description="Inserted after highlighted words")
    max_transcript_chars: int = Field(
        500, ge=20, le=5000, description="Transcript length shown in feedback"
    )

    model_config = {"use_enum_values": True}

    @model_validator(mode="after")
    def validate_markers(self):
        """Require both markers or neither."""
        if bool(self.highlight_marker_start) != bool(self.highlight_marker_end):
            raise ValueError(
                "highlight_marker_start and highlight_marker_end must both be set or both be empty"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the speaking grader."""

    question_bank: QuestionBankConfig = Field(
        default_factory=QuestionBankConfig, description="Question bank selection"
    )
    feedback: FeedbackConfig = Field(
        default_factory=FeedbackConfig, description="Feedback presentation"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
