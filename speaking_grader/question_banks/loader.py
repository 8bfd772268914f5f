"""Question bank loading from JSON/YAML files with fallback to the built-in bank.

Banks live in a directory as ``<bank-id>.json`` (or ``.yaml``/``.yml``) and
may be listed in a ``manifest.json`` of the form ``{"banks": ["id", ...]}``.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from speaking_grader.config.validators import format_validation_errors
from speaking_grader.domain.models import QuestionBank
from speaking_grader.logging import get_logger

from .builtin import DEFAULT_BANK_ID, get_default_bank
from .exceptions import QuestionBankError
from .validators import check_bank_warnings

logger = get_logger(__name__, component="question_banks")

BANK_SUFFIXES = (".json", ".yaml", ".yml")
MANIFEST_FILENAME = "manifest.json"


@dataclass
class BankResolution:
    """Outcome of resolving a requested bank.

    Attributes:
        bank: The bank to use (the default bank when the request failed)
        requested: The bank ID or path that was asked for
        error: User-facing message when the default bank was substituted
    """

    bank: QuestionBank
    requested: str
    error: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.error is not None


def _read_bank_file(path: Path) -> Dict[str, Any]:
    """Read a bank file into a dict, choosing the parser by extension."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError:
        raise QuestionBankError(
            f"Question bank file not found: {path}",
            suggestions=[f"Ensure {path} exists and is readable"],
        )
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise QuestionBankError(
            f"Failed to parse question bank {path}: {e}",
            suggestions=[
                "Check the file syntax",
                "JSON banks must be a single object with id, name and questions",
            ],
        )
    except OSError as e:
        raise QuestionBankError(
            f"Failed to read question bank {path}: {e}",
            suggestions=["Check file permissions"],
        )

    if not isinstance(data, dict):
        raise QuestionBankError(
            f"Invalid question bank format in {path}",
            errors=["Top-level value must be an object"],
            suggestions=["Wrap the bank in an object with id, name and questions"],
        )

    return data


def load_question_bank(
    path: Union[str, Path], logger_instance: Optional[logging.Logger] = None
) -> QuestionBank:
    """
    Load and validate a question bank file.

    Args:
        path: Path to a .json, .yaml or .yml bank file
        logger_instance: Optional logger (defaults to module logger)

    Returns:
        Validated QuestionBank

    Raises:
        QuestionBankError: If the file is missing, unparsable or invalid
    """
    log = logger_instance or logger
    path = Path(path)

    if path.suffix.lower() not in BANK_SUFFIXES:
        raise QuestionBankError(
            f"Unsupported question bank file type: {path.name}",
            suggestions=[f"Use one of: {', '.join(BANK_SUFFIXES)}"],
        )

    data = _read_bank_file(path)

    try:
        bank = QuestionBank.model_validate(data)
    except ValidationError as e:
        raise QuestionBankError(
            f"Question bank validation failed: {path}",
            errors=format_validation_errors(e),
            suggestions=[
                "Each bank needs id, name and a questions list",
                "Each question needs id, text and keywords",
            ],
        )

    for message in check_bank_warnings(bank):
        log.warning(
            message,
            extra={"event": "question_bank.warning", "bank_id": bank.id},
        )

    log.info(
        f"Loaded question bank: {bank.name} ({len(bank.questions)} questions)",
        extra={
            "event": "question_bank.loaded",
            "bank_id": bank.id,
            "question_count": len(bank.questions),
            "path": str(path),
        },
    )
    return bank


def find_bank_file(bank_id: str, bank_dir: Union[str, Path]) -> Optional[Path]:
    """Locate ``<bank_dir>/<bank_id>`` with any supported extension."""
    directory = Path(bank_dir)
    for suffix in BANK_SUFFIXES:
        candidate = directory / f"{bank_id}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def resolve_question_bank(
    bank: Optional[str],
    bank_dir: Union[str, Path] = "question-banks",
    fallback_to_default: bool = True,
    logger_instance: Optional[logging.Logger] = None,
) -> BankResolution:
    """
    Resolve a bank ID or file path to a loaded question bank.

    Resolution order:
    1. Empty or "default" returns the built-in bank
    2. An existing file path is loaded directly
    3. ``<bank_dir>/<bank>.json|.yaml|.yml`` is tried

    Args:
        bank: Bank ID or path to a bank file
        bank_dir: Directory holding bank files
        fallback_to_default: Substitute the built-in bank on failure
        logger_instance: Optional logger (defaults to module logger)

    Returns:
        BankResolution with the bank and, on fallback, an error message

    Raises:
        QuestionBankError: If loading fails and fallback is disabled
    """
    log = logger_instance or logger
    requested = (bank or "").strip() or DEFAULT_BANK_ID

    if requested == DEFAULT_BANK_ID:
        default_bank = get_default_bank()
        log.info(
            f"Loaded built-in default bank ({len(default_bank.questions)} questions)",
            extra={"event": "question_bank.loaded", "bank_id": default_bank.id, "builtin": True},
        )
        return BankResolution(bank=default_bank, requested=requested)

    try:
        as_path = Path(requested)
        if as_path.is_file():
            bank_path = as_path
        else:
            bank_path = find_bank_file(requested, bank_dir)
            if bank_path is None:
                raise QuestionBankError(
                    f'Question bank "{requested}" not found in {bank_dir}',
                    suggestions=[
                        f"Create {Path(bank_dir) / (requested + '.json')}",
                        "Pass a path to a bank file instead of an ID",
                    ],
                )
        return BankResolution(
            bank=load_question_bank(bank_path, logger_instance=log), requested=requested
        )
    except QuestionBankError as e:
        if not fallback_to_default:
            raise
        log.warning(
            f'Question bank "{requested}" not found. Using default.',
            extra={"event": "question_bank.fallback", "requested": requested, "reason": e.message},
        )
        return BankResolution(
            bank=get_default_bank(),
            requested=requested,
            error=f'Question bank "{requested}" not found. Loaded default questions instead.',
        )


def list_available_banks(
    bank_dir: Union[str, Path] = "question-banks",
    logger_instance: Optional[logging.Logger] = None,
) -> List[QuestionBank]:
    """
    List the banks named in ``<bank_dir>/manifest.json``.

    The built-in bank always comes first. Banks that fail to load are
    logged and skipped; an absent or invalid manifest yields only the
    built-in bank.

    Args:
        bank_dir: Directory holding bank files and the manifest
        logger_instance: Optional logger (defaults to module logger)

    Returns:
        List of available banks
    """
    log = logger_instance or logger
    banks = [get_default_bank()]
    manifest_path = Path(bank_dir) / MANIFEST_FILENAME

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
        bank_ids = manifest["banks"]
        if not isinstance(bank_ids, list):
            raise TypeError("'banks' must be a list")
    except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
        log.warning(
            f"Could not load question bank manifest: {e}",
            extra={"event": "question_bank.manifest.unavailable", "path": str(manifest_path)},
        )
        return banks

    for bank_id in bank_ids:
        bank_path = find_bank_file(str(bank_id), bank_dir)
        if bank_path is None:
            log.warning(
                f'Question bank "{bank_id}" listed in manifest but not found',
                extra={"event": "question_bank.manifest.missing", "bank_id": bank_id},
            )
            continue
        try:
            banks.append(load_question_bank(bank_path, logger_instance=log))
        except QuestionBankError as e:
            log.error(
                f'Failed to load question bank "{bank_id}": {e.message}',
                extra={"event": "question_bank.load_failed", "bank_id": bank_id},
            )

    return banks
