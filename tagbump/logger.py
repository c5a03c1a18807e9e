"""
Logging setup for tagbump.

Progress messages go to stderr through loguru so that stdout only carries
the final report. An optional rotating log file keeps a record of every
tag the tool created or pushed.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from tagbump.config_schema import LoggingConfig

CONSOLE_FORMAT = "<level>{message}</level>"
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class TagBumpLogger:
    """Centralized loguru configuration for the CLI."""

    def __init__(self) -> None:
        self.is_configured = False
        self.log_file_path: Optional[Path] = None
        self._handler_ids: list[int] = []

    def configure_logging(
        self,
        config: Optional[LoggingConfig] = None,
        *,
        debug: bool = False,
        force: bool = False,
    ) -> None:
        """
        Install the console handler and, when configured, the file handler.

        Args:
            config: Logging section of the configuration; defaults apply
                when omitted.
            debug: Show DEBUG messages with source locations on the console.
            force: Replace an existing configuration instead of keeping it.
        """
        if self.is_configured and not force:
            logger.debug("Logger already configured, skipping reconfiguration")
            return

        config = config or LoggingConfig()

        logger.remove()
        self._handler_ids = []
        self.log_file_path = None

        self._configure_console_handler(config, debug)
        if config.file_path is not None:
            self._configure_file_handler(config, Path(config.file_path))

        self.is_configured = True
        logger.debug(f"Logging configured (level={config.level}, debug={debug})")

    def _configure_console_handler(self, config: LoggingConfig, debug: bool) -> None:
        handler_id = logger.add(
            sys.stderr,
            format=DEBUG_CONSOLE_FORMAT if debug else CONSOLE_FORMAT,
            level="DEBUG" if debug else config.level,
            colorize=None,
            backtrace=debug,
            diagnose=debug,
        )
        self._handler_ids.append(handler_id)

    def _configure_file_handler(self, config: LoggingConfig, path: Path) -> None:
        self.log_file_path = path
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        handler_id = logger.add(
            str(self.log_file_path),
            format=config.format,
            level=config.level,
            rotation=f"{config.max_file_size_mb} MB",
            retention=f"{config.retention_days} days",
            compression="gz",
            encoding="utf-8",
        )
        self._handler_ids.append(handler_id)

    def shutdown(self) -> None:
        """Remove the handlers installed by this instance."""
        for handler_id in self._handler_ids:
            try:
                logger.remove(handler_id)
            except ValueError:
                continue
        self._handler_ids = []
        self.is_configured = False


_logger_instance: Optional[TagBumpLogger] = None


def get_logger() -> TagBumpLogger:
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = TagBumpLogger()
    return _logger_instance


def setup_logging(
    config: Optional[LoggingConfig] = None, *, debug: bool = False
) -> TagBumpLogger:
    """Configure logging for one CLI run, replacing any earlier setup."""
    logger_instance = get_logger()
    logger_instance.configure_logging(config, debug=debug, force=True)
    return logger_instance


__all__ = ["TagBumpLogger", "get_logger", "setup_logging"]
