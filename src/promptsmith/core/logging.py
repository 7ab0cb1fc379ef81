"""Structured logging for promptsmith."""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger import jsonlogger


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    return logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class StructuredLogger:
    """
    Structured logger with JSON output support and context tracking.

    Wraps a stdlib logger so that keyword context ends up as extra fields on
    the record, which the JSON formatter emits as top-level keys.
    """

    def __init__(
        self,
        name: str = "promptsmith",
        level: LogLevel = LogLevel.WARNING,
        json_output: bool = False,
        log_file: Optional[Path] = None,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Log level
            json_output: If True, output JSON-formatted logs
            log_file: Optional file path to write logs to
        """
        self.name = name
        self.level = level
        self.json_output = json_output
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.value))
        self.logger.propagate = False
        self.logger.handlers.clear()

        formatter = _build_formatter(json_output)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, level.value))
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._add_file_handler(log_file, formatter)

    def _add_file_handler(self, log_file: Path, formatter: logging.Formatter) -> None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, self.level.value))
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)
        self.log_file = log_file

    def reconfigure(
        self,
        level: Optional[LogLevel] = None,
        json_output: Optional[bool] = None,
        log_file: Optional[Path] = None,
    ) -> None:
        """Update level, output format or log file in place."""
        if level is not None:
            self.level = level
            self.logger.setLevel(getattr(logging, level.value))
            for handler in self.logger.handlers:
                handler.setLevel(getattr(logging, level.value))
        if json_output is not None and json_output != self.json_output:
            self.json_output = json_output
            formatter = _build_formatter(json_output)
            for handler in self.logger.handlers:
                handler.setFormatter(formatter)
        if log_file is not None and self.log_file != log_file:
            self._add_file_handler(log_file, _build_formatter(self.json_output))

    def _log_with_context(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log message with additional context.

        Args:
            level: Log level (logging.DEBUG, etc.)
            message: Log message
            context: Additional context dictionary
            **kwargs: Additional keyword arguments to include in log
        """
        if context:
            kwargs.update(context)
        self.logger.log(level, message, extra=kwargs or None)

    def debug(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log_with_context(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log_with_context(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log_with_context(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log_with_context(logging.ERROR, message, context, **kwargs)

    def log_composition(
        self,
        framework: str,
        domain: str,
        vs_enabled: bool,
        prompt_length: int,
        duration_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log one prompt composition.

        Args:
            framework: Framework key used for rendering
            domain: Domain that selected the system prompt
            vs_enabled: Whether a diversity-sampling block was included
            prompt_length: Length of the final prompt in characters
            duration_ms: Composition time in milliseconds
            **kwargs: Additional metadata
        """
        context = {
            "event_type": "composition",
            "framework": framework,
            "domain": domain,
            "vs_enabled": vs_enabled,
            "prompt_length": prompt_length,
        }
        if duration_ms is not None:
            context["duration_ms"] = round(duration_ms, 3)
        context.update(kwargs)

        self.debug(f"Composed prompt ({framework})", context=context)

    def log_validation(
        self,
        kind: str,
        error_count: int,
        warning_count: int = 0,
        **kwargs: Any,
    ) -> None:
        """
        Log the outcome of a validation pass.

        Args:
            kind: Which validator ran (e.g., "prompt_config", "complete")
            error_count: Number of errors found
            warning_count: Number of warnings found
            **kwargs: Additional metadata
        """
        context = {
            "event_type": "validation",
            "kind": kind,
            "error_count": error_count,
            "warning_count": warning_count,
        }
        context.update(kwargs)

        if error_count:
            self.info(f"Validation {kind}: {error_count} error(s)", context=context)
        else:
            self.debug(f"Validation {kind}: ok", context=context)


_default_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "promptsmith",
    level: Optional[LogLevel] = None,
    json_output: Optional[bool] = None,
    log_file: Optional[Path] = None,
) -> StructuredLogger:
    """
    Get or create the process-wide structured logger.

    Args:
        name: Logger name (only used on first call)
        level: Log level (if None, keeps the existing level)
        json_output: If True, output JSON-formatted logs (if None, keeps existing setting)
        log_file: Optional file path to write logs to

    Returns:
        StructuredLogger instance
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = StructuredLogger(
            name=name,
            level=level or LogLevel.WARNING,
            json_output=json_output or False,
            log_file=log_file,
        )
    else:
        _default_logger.reconfigure(level=level, json_output=json_output, log_file=log_file)

    return _default_logger


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> StructuredLogger:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON-formatted logs
        log_file: Optional file path to write logs to

    Returns:
        Configured StructuredLogger instance
    """
    log_level = LogLevel[level.upper()]
    log_path = Path(log_file) if log_file else None

    return get_logger(
        level=log_level,
        json_output=json_output,
        log_file=log_path,
    )
