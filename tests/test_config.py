"""Integration tests for configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from speaking_grader.config import (
    AppConfig,
    ConfigurationError,
    FeedbackConfig,
    QuestionBankConfig,
    load_config,
    load_environment_config,
)
from speaking_grader.config.validators import check_for_warnings


# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, clean_env):
        """Test loading a valid configuration file."""
        with pytest.warns(UserWarning, match="fallback_to_default is disabled"):
            app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.question_bank.bank == "sample"
        assert app_config.question_bank.directory == "tests/fixtures/banks"
        assert app_config.question_bank.fallback_to_default is False

        assert app_config.feedback.output_format == "json"
        assert app_config.feedback.highlight_marker_start == "["
        assert app_config.feedback.highlight_marker_end == "]"
        assert app_config.feedback.max_transcript_chars == 200

        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"

        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_load_minimal_config(self, clean_env):
        """Test loading a minimal configuration with defaults."""
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.logging.level == "WARNING"
        assert app_config.logging.format == "key-value"  # Default
        assert app_config.question_bank.bank == "default"  # Default
        assert app_config.question_bank.directory == "question-banks"  # Default
        assert app_config.feedback.output_format == "text"  # Default
        assert app_config.feedback.max_transcript_chars == 500  # Default

    def test_no_config_file_uses_defaults(self, clean_env, tmp_path, monkeypatch):
        """Test running without any config file."""
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config == AppConfig()

    def test_config_found_in_config_directory(self, clean_env, tmp_path, monkeypatch):
        """Test the ./config/config.yaml fallback location."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("question_bank:\n  bank: sample\n")
        monkeypatch.chdir(tmp_path)

        app_config, _ = load_config()

        assert app_config.question_bank.bank == "sample"

    def test_config_file_not_found(self, clean_env):
        """Test error when an explicit config file doesn't exist."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value)

    def test_invalid_yaml_syntax(self, tmp_path, clean_env):
        """Test error on invalid YAML syntax."""
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("feedback:\n  output_format: [text\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Failed to parse YAML" in str(exc_info.value)

    def test_empty_config_file(self, tmp_path, clean_env):
        """Test error on an empty config file."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        with pytest.raises(ConfigurationError, match="Configuration file is empty"):
            load_config(config_file)

    def test_non_mapping_config_file(self, tmp_path, clean_env):
        """Test error when the top level is not a mapping."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="mapping at the top level"):
            load_config(config_file)

    def test_invalid_values_listed(self, clean_env):
        """Test every validation error is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_config.yaml")

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("feedback -> output_format" in e for e in errors)
        assert any("feedback -> max_transcript_chars" in e for e in errors)
        assert any("logging -> level" in e for e in errors)
        assert "Suggestions:" in str(exc_info.value)

    def test_unknown_section_warning(self, tmp_path, clean_env):
        """Test unknown sections warn instead of failing."""
        config_file = tmp_path / "typo.yaml"
        config_file.write_text("loging:\n  level: DEBUG\n")

        with pytest.warns(UserWarning, match="Unknown configuration section 'loging'"):
            app_config, _ = load_config(config_file)

        assert app_config.logging.level == "INFO"


class TestConfigModels:
    """Test configuration model validation."""

    def test_blank_bank_means_default(self):
        assert QuestionBankConfig(bank="  ").bank == "default"

    def test_blank_directory_rejected(self):
        with pytest.raises(ValidationError):
            QuestionBankConfig(directory=" ")

    def test_markers_must_pair(self):
        with pytest.raises(ValidationError, match="both be set or both be empty"):
            FeedbackConfig(highlight_marker_start="[", highlight_marker_end="")

    def test_markers_may_both_be_empty(self):
        config = FeedbackConfig(highlight_marker_start="", highlight_marker_end="")

        assert config.highlight_marker_start == ""

    @pytest.mark.parametrize("value", [19, 5001])
    def test_max_transcript_chars_range(self, value):
        with pytest.raises(ValidationError):
            FeedbackConfig(max_transcript_chars=value)


class TestConfigWarnings:
    """Test non-fatal configuration warnings."""

    def test_clean_config_has_no_warnings(self):
        assert check_for_warnings({"question_bank": {"bank": "wk1"}, "logging": {}}) == []

    def test_uppercase_output_format(self):
        warnings = check_for_warnings({"feedback": {"output_format": "JSON"}})

        assert warnings == ["output_format 'JSON' should be lowercase (text or json)"]

    def test_empty_markers(self):
        warnings = check_for_warnings(
            {"feedback": {"highlight_marker_start": "", "highlight_marker_end": ""}}
        )

        assert len(warnings) == 1
        assert "matched words will not be marked" in warnings[0]


class TestEnvironmentConfiguration:
    """Test environment variable configuration."""

    def test_defaults(self, clean_env):
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.environment == "local"
        assert env_config.question_bank is None
        assert env_config.question_bank_dir is None

    def test_all_variables(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("ENVIRONMENT", "staging")
        clean_env.setenv("QUESTION_BANK", " technology ")
        clean_env.setenv("QUESTION_BANK_DIR", "/srv/banks")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.environment == "staging"
        assert env_config.question_bank == "technology"
        assert env_config.question_bank_dir == "/srv/banks"

    def test_blank_question_bank_ignored(self, clean_env):
        clean_env.setenv("QUESTION_BANK", "   ")

        assert load_environment_config().question_bank is None

    def test_invalid_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "VERBOSE")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "Invalid LOG_LEVEL" in exc_info.value.errors[0]

    def test_empty_bank_dir(self, clean_env):
        clean_env.setenv("QUESTION_BANK_DIR", " ")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert exc_info.value.errors == ["QUESTION_BANK_DIR is set but empty"]

    def test_load_config_propagates_env_errors(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError, match="Environment variable validation failed"):
            load_config(FIXTURES_DIR / "minimal_config.yaml")
