"""Tests for configuration loading and logging setup."""

import json
import logging

import yaml

from promptsmith.core.config import PROJECT_CONFIG_NAME, Config
from promptsmith.core.logging import LogLevel, StructuredLogger


class TestConfig:
    """Test the configuration hierarchy."""

    def test_defaults(self, tmp_path):
        """Test defaults with no config files."""
        config = Config.load(user_config_path=tmp_path / "missing.yaml", project_dir=tmp_path)
        assert config.output_format == "text"
        assert config.show_system_prompt is False
        assert config.log_level == "WARNING"
        assert config.color is None

    def test_hierarchy(self, tmp_path):
        """CLI args beat the project file, which beats the user file."""
        user_file = tmp_path / "user.yaml"
        user_file.write_text(
            yaml.dump({"output_format": "json", "show_quality": True, "log_level": "INFO"}),
            encoding="utf-8",
        )
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / PROJECT_CONFIG_NAME).write_text(
            yaml.dump({"output_format": "markdown"}), encoding="utf-8"
        )

        config = Config.load(
            {"log_level": "DEBUG", "verbose": None},
            user_config_path=user_file,
            project_dir=project_dir,
        )
        assert config.output_format == "markdown"
        assert config.show_quality is True
        assert config.log_level == "DEBUG"
        assert config.verbose is False

    def test_json_file(self, tmp_path):
        """Test loading a JSON config file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"show_system_prompt": True}), encoding="utf-8")
        config = Config()
        config.load_file(path)
        assert config.show_system_prompt is True

    def test_unreadable_file_skipped(self, tmp_path):
        """Test that a broken file leaves defaults alone."""
        path = tmp_path / "broken.yaml"
        path.write_text("output_format: [unclosed", encoding="utf-8")
        config = Config()
        config.load_file(path)
        assert config.output_format == "text"

    def test_unknown_output_format_reset(self, tmp_path):
        """Test that an unknown output format falls back to text."""
        path = tmp_path / "config.yaml"
        path.write_text("output_format: html\n", encoding="utf-8")
        config = Config()
        config.load_file(path)
        assert config.output_format == "text"

    def test_unknown_keys_ignored(self, tmp_path):
        """Test that unknown keys are not set."""
        path = tmp_path / "config.yaml"
        path.write_text("provider: ollama\nverbose: true\n", encoding="utf-8")
        config = Config()
        config.load_file(path)
        assert config.verbose is True
        assert not hasattr(config, "provider")

    def test_save_round_trip(self, tmp_path):
        """Test saving then loading a config."""
        config = Config()
        config.output_format = "json"
        config.show_quality = True
        path = tmp_path / "nested" / "config.yaml"
        config.save(path)

        loaded = Config()
        loaded.load_file(path)
        assert loaded.to_dict() == config.to_dict()


class TestStructuredLogger:
    """Test structured log output."""

    def test_json_composition_record(self, tmp_path):
        """Test the JSON record of a composition."""
        log_file = tmp_path / "logs" / "promptsmith.log"
        logger = StructuredLogger(
            name="promptsmith.test.json",
            level=LogLevel.DEBUG,
            json_output=True,
            log_file=log_file,
        )
        logger.log_composition(
            framework="Few-Shot",
            domain="General",
            vs_enabled=True,
            prompt_length=120,
            duration_ms=1.23456,
        )
        for handler in logger.logger.handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["message"] == "Composed prompt (Few-Shot)"
        assert record["level"] == "DEBUG"
        assert record["event_type"] == "composition"
        assert record["prompt_length"] == 120
        assert record["duration_ms"] == 1.235

    def test_level_filters(self, tmp_path):
        """Test that records below the level are dropped."""
        log_file = tmp_path / "plain.log"
        logger = StructuredLogger(
            name="promptsmith.test.plain", level=LogLevel.WARNING, log_file=log_file
        )
        logger.log_validation("complete", error_count=0)
        logger.warning("kept")
        for handler in logger.logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "kept" in content
        assert "Validation complete" not in content

    def test_reconfigure_level(self):
        """Test changing the level in place."""
        logger = StructuredLogger(name="promptsmith.test.reconfigure")
        logger.reconfigure(level=LogLevel.DEBUG)
        assert logger.logger.level == logging.DEBUG
