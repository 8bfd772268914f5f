"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from pydantic import ValidationError

KNOWN_SECTIONS = {"question_bank", "feedback", "logging"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    # Unknown sections are ignored by the schema, usually a typo
    for key in sorted(set(config_dict) - KNOWN_SECTIONS):
        warning_messages.append(f"Unknown configuration section '{key}' will be ignored")

    question_bank = config_dict.get("question_bank", {})
    if isinstance(question_bank, dict) and question_bank.get("fallback_to_default") is False:
        warning_messages.append(
            "fallback_to_default is disabled; a missing question bank will stop grading"
        )

    feedback = config_dict.get("feedback", {})
    if isinstance(feedback, dict):
        output_format = feedback.get("output_format")
        if isinstance(output_format, str) and output_format != output_format.lower():
            warning_messages.append(
                f"output_format '{output_format}' should be lowercase (text or json)"
            )

        start = feedback.get("highlight_marker_start")
        end = feedback.get("highlight_marker_end")
        if start == "" and end == "":
            warning_messages.append("Highlight markers are empty; matched words will not be marked")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)


def format_validation_errors(error: ValidationError) -> List[str]:
    """
    Convert Pydantic validation errors into user-friendly messages.

    Args:
        error: ValidationError raised by model_validate

    Returns:
        One message per underlying error
    """
    messages = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "(root)"
        error_type = item["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "bool_type", "list_type"]:
            expected_type = error_type.replace("_type", "")
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')}"
            )
        elif "enum" in error_type:
            messages.append(f"Invalid value for '{field_path}': {item['msg']}")
        else:
            messages.append(f"{field_path}: {item['msg']}")

    return messages
