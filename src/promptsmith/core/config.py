"""Configuration management for promptsmith."""

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from promptsmith.core.logging import get_logger

USER_CONFIG_PATH = Path.home() / ".promptsmith" / "config.yaml"
PROJECT_CONFIG_NAME = ".promptsmith.yaml"

OUTPUT_FORMATS = ("text", "markdown", "json")


class Config:
    """Configuration manager with hierarchy: CLI args > project config > user config > defaults."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.output_format: str = "text"
        self.show_system_prompt: bool = False
        self.show_quality: bool = False
        self.verbose: bool = False
        self.color: Optional[bool] = None
        self.log_level: str = "WARNING"
        self.json_logging: bool = False
        self.log_file: Optional[str] = None

    @classmethod
    def load(
        cls,
        cli_args: Optional[dict[str, Any]] = None,
        user_config_path: Optional[Path] = None,
        project_dir: Optional[Path] = None,
    ) -> "Config":
        """
        Load configuration from hierarchy: CLI args > project config > user config > defaults.

        Args:
            cli_args: Dictionary of CLI arguments to override config
            user_config_path: User config file (default: ~/.promptsmith/config.yaml)
            project_dir: Directory holding .promptsmith.yaml (default: current directory)

        Returns:
            Config instance with loaded values
        """
        config = cls()

        user_path = user_config_path or USER_CONFIG_PATH
        if user_path.exists():
            config.load_file(user_path)

        project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
        if project_path.exists():
            config.load_file(project_path)

        if cli_args:
            for key, value in cli_args.items():
                if value is not None and hasattr(config, key):
                    setattr(config, key, value)

        return config

    def load_file(self, config_path: Path) -> None:
        """Apply values from a YAML or JSON file; unreadable files are skipped."""
        logger = get_logger()
        try:
            content = config_path.read_text(encoding="utf-8")
            if config_path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(content)
            elif config_path.suffix == ".json":
                data = json.loads(content)
            else:
                logger.warning(f"Skipping config file with unknown format: {config_path}")
                return
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            logger.warning(f"Skipping unreadable config file {config_path}: {e}")
            return

        if not isinstance(data, dict):
            return

        for key, value in data.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)

        if self.output_format not in OUTPUT_FORMATS:
            logger.warning(
                f"Unknown output_format '{self.output_format}' in {config_path}, using 'text'"
            )
            self.output_format = "text"

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "output_format": self.output_format,
            "show_system_prompt": self.show_system_prompt,
            "show_quality": self.show_quality,
            "verbose": self.verbose,
            "color": self.color,
            "log_level": self.log_level,
            "json_logging": self.json_logging,
            "log_file": self.log_file,
        }

    def save(self, path: Path, format: str = "yaml") -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save config file
            format: Format to save as ('yaml' or 'json')
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {k: v for k, v in self.to_dict().items() if v is not None}

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)

        path.write_text(content, encoding="utf-8")
