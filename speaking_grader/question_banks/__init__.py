"""Question bank loading and the built-in default bank.

This module provides:
- load_question_bank: Read and validate a JSON/YAML bank file
- resolve_question_bank: Pick a bank by ID or path with default fallback
- list_available_banks: Banks named in a directory manifest
- check_bank_warnings: Non-fatal content checks
"""

from .builtin import DEFAULT_BANK_ID, DEFAULT_QUESTION_BANK, get_default_bank
from .exceptions import QuestionBankError
from .loader import (
    BankResolution,
    find_bank_file,
    list_available_banks,
    load_question_bank,
    resolve_question_bank,
)
from .validators import check_bank_warnings

__all__ = [
    "DEFAULT_BANK_ID",
    "DEFAULT_QUESTION_BANK",
    "get_default_bank",
    "QuestionBankError",
    "BankResolution",
    "find_bank_file",
    "list_available_banks",
    "load_question_bank",
    "resolve_question_bank",
    "check_bank_warnings",
]
