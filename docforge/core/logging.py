"""
Structured Logging for DocForge.

This module provides a logging infrastructure that supports context binding,
a run logger for the per-file documentation stages, and consistent formatting
across the application.

Architecture Context
--------------------
Logging is a Core layer service. Components never reach for a process-wide
logger on their own; they receive a StructuredLogger at construction and
fall back to get_logger(__name__) only when none was passed:

    from docforge.core.logging import get_logger
    walker = DocumentationWalker(logger=get_logger("docforge.walker"))

Logger Types
------------
**StructuredLogger**
    Base logger with context binding support. Key-value pairs passed to a
    call, or bound with bind(), are appended to the message:

        logger = get_logger(__name__)
        logger.bind(file="Service.cs")
        logger.warning("No strategy", kind="property")

**RunLogger**
    Tracks the stages of documenting one file (classify, apply, rewrite)
    with timing:

        rlog = RunLogger("Service.cs")
        rlog.start_stage("classify")
        rlog.finish(success=True, documented=12)

Module-Level Factory
--------------------
get_logger() caches loggers by name, so repeated calls return the same
instance.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


class StructuredLogger:
    """
    Structured logger with context support.

    Provides consistent logging across the application with
    support for structured fields and context tracking.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _ConfigHolder.get_config()
        self._context: dict[str, Any] = {}
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        self.logger.handlers.clear()

        formatter = logging.Formatter(
            self.config.format,
            datefmt=self.config.date_format,
        )

        if self.config.console:
            # RichHandler has its own formatting
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Attach fields that appear in every later message."""
        self._context.update(kwargs)
        return self

    def unbind(self, *keys: str) -> None:
        """Remove previously bound fields."""
        for key in keys:
            self._context.pop(key, None)

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Format message with context and extra fields."""
        fields = {**self._context, **kwargs}
        if fields:
            field_str = " | ".join(f"{k}={v}" for k, v in fields.items())
            return f"{message} | {field_str}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration.

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure global logging settings.

    Loggers created before this call are reconfigured as well.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.
    """
    config = LogConfig(
        level=level,
        file_path=log_file,
        console=console,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _ConfigHolder.set_config(config)

    for logger in _loggers.values():
        logger.config = config
        logger._setup_logger()


class _ConfigHolder:
    """Holds default logging configuration."""

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


class RunLogger:
    """
    Specialized logger for documenting one source file.

    Tracks processing stages and provides timing information.
    """

    def __init__(self, source: str, logger: Optional[StructuredLogger] = None) -> None:
        self.source = source
        self.logger = logger or get_logger("docforge.run")
        self._stage_start: Optional[datetime] = None
        self._current_stage: Optional[str] = None

    def start_stage(self, stage: str) -> None:
        """Mark the start of a processing stage."""
        self._finish_current_stage()
        self._current_stage = stage
        self._stage_start = datetime.now()
        self.logger.debug("Starting stage", source=self.source, stage=stage)

    def _finish_current_stage(self) -> None:
        """Log completion of current stage if any."""
        if self._current_stage and self._stage_start:
            duration = (datetime.now() - self._stage_start).total_seconds()
            self.logger.debug(
                "Completed stage",
                source=self.source,
                stage=self._current_stage,
                duration_sec=f"{duration:.3f}",
            )
        self._current_stage = None
        self._stage_start = None

    def finish(
        self, success: bool, documented: int = 0, error: Optional[str] = None
    ) -> None:
        """Mark run completion."""
        self._finish_current_stage()
        if success:
            self.logger.info(
                "Documentation completed",
                source=self.source,
                documented=documented,
            )
        else:
            self.logger.error(
                "Documentation failed",
                source=self.source,
                error=error,
            )

    def log_progress(self, message: str, **kwargs: Any) -> None:
        """Log progress within a stage."""
        self.logger.debug(
            message,
            source=self.source,
            stage=self._current_stage,
            **kwargs,
        )


