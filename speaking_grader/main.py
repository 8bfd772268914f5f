"""Command line entry point for the speaking grader."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from speaking_grader.config.environment import EnvironmentConfig
from speaking_grader.config.exceptions import ConfigurationError
from speaking_grader.config.loader import load_config
from speaking_grader.config.models import AppConfig
from speaking_grader.domain.models import Question, QuestionBank
from speaking_grader.feedback import FeedbackRenderer
from speaking_grader.logging import get_logger
from speaking_grader.logging.config import configure_logging
from speaking_grader.matching.engine import KeywordMatcher
from speaking_grader.matching.models import MatchResult
from speaking_grader.matching.utils import build_feedback_context
from speaking_grader.question_banks.loader import resolve_question_bank
from speaking_grader.review.service import PracticeSession, QuestionNotFoundError

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path],
    log_level_override: Optional[str] = None,
    bank_override: Optional[str] = None,
    bank_dir_override: Optional[str] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Precedence for each setting: CLI > environment > config file > default.

    Args:
        config_path: Path to configuration file (None for default lookup)
        log_level_override: Log level from CLI
        bank_override: Bank ID or path from CLI
        bank_dir_override: Bank directory from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with overrides applied

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    bank = bank_override or env_config.question_bank
    if bank:
        app_config.question_bank.bank = bank

    bank_dir = bank_dir_override or env_config.question_bank_dir
    if bank_dir:
        app_config.question_bank.directory = bank_dir

    return app_config, env_config


def read_transcript(args: argparse.Namespace) -> str:
    """Read the transcript from --transcript, --transcript-file, or stdin."""
    if args.transcript is not None:
        return args.transcript
    if args.transcript_file is not None:
        try:
            return args.transcript_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read transcript file: {e}",
                suggestions=[f"Ensure {args.transcript_file} exists and is readable"],
            )
    return sys.stdin.read()


def format_question_list(bank: QuestionBank) -> str:
    """Format the questions of a bank for --list."""
    lines = [f"{bank.name} ({bank.id}): {len(bank.questions)} questions"]
    for question in bank.questions:
        lines.append(f"  {question.id} [{question.type.value}] {question.text.splitlines()[0]}")
        lines.append(f"      required: {', '.join(question.keywords) or '(none)'}")
        if question.optional_keywords:
            lines.append(f"      bonus:    {', '.join(question.optional_keywords)}")
    return "\n".join(lines)


def format_result(
    result: MatchResult,
    transcript: str,
    app_config: AppConfig,
    question: Optional[Question] = None,
) -> str:
    """Format a grading result as text or JSON per configuration."""
    feedback = app_config.feedback
    if feedback.output_format == "json":
        payload = result.to_dict()
        payload["score"] = result.score
        if question is not None:
            payload["questionId"] = question.id
        return json.dumps(payload, ensure_ascii=False)

    context = build_feedback_context(
        result,
        transcript=transcript,
        question=question,
        marker_start=feedback.highlight_marker_start,
        marker_end=feedback.highlight_marker_end,
        max_transcript_chars=feedback.max_transcript_chars,
    )
    return FeedbackRenderer().render_attempt(context).rstrip("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Speaking Grader - check spoken-answer transcripts for required vocabulary"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument("--bank", default=None, help="Question bank ID or path to a bank file")
    parser.add_argument("--bank-dir", default=None, help="Directory holding question bank files")
    parser.add_argument(
        "--list", action="store_true", help="List the questions of the bank and exit"
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument("--question", default=None, help="ID of the question being answered")
    target.add_argument(
        "--keywords", nargs="+", default=None, help="Required keywords for ad-hoc grading"
    )
    parser.add_argument(
        "--optional", nargs="+", default=None, help="Bonus keywords for ad-hoc grading"
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--transcript", default=None, help="Transcript text to grade")
    source.add_argument(
        "--transcript-file", type=Path, default=None, help="File containing the transcript"
    )

    parser.add_argument(
        "--output", choices=["text", "json"], default=None, help="Output format (overrides config)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the speaking grader.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.list and args.question is None and args.keywords is None:
        parser.error("one of --question, --keywords or --list is required")
    if args.optional and args.keywords is None:
        parser.error("--optional requires --keywords")

    try:
        app_config, env_config = load_runtime_config(
            args.config, args.log_level, args.bank, args.bank_dir
        )
        if args.output:
            app_config.feedback.output_format = args.output

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        bank_config = app_config.question_bank
        resolution = resolve_question_bank(
            bank_config.bank,
            bank_dir=bank_config.directory,
            fallback_to_default=bank_config.fallback_to_default,
        )
        if resolution.error:
            print(resolution.error, file=sys.stderr)

        if args.list:
            print(format_question_list(resolution.bank))
            return 0

        transcript = read_transcript(args)

        if args.keywords is not None:
            result = KeywordMatcher().evaluate(args.keywords, transcript, args.optional)
            question = None
        else:
            session = PracticeSession(resolution.bank)
            attempt = session.grade(args.question, transcript)
            result = attempt.result
            question = session.get_question(args.question)

        print(format_result(result, transcript, app_config, question))

        logger.info(
            "Grading completed",
            extra={
                "event": "cli.grading.completed",
                "bank_id": resolution.bank.id,
                "question_id": question.id if question else None,
                "rating": result.rating,
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 1
    except QuestionNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(
            f"Unexpected error: {e}",
            exc_info=True,
            extra={"event": "cli.unexpected_error"},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
