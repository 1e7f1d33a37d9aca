"""Logging system with Rich support."""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from sassyflow.core.config.settings import (
    CompileSettings,
    LoggingSettings,
    get_settings,
)

_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    settings: LoggingSettings | None = None,
    debug: bool = False,
) -> None:
    """Setup logging configuration.

    Args:
        settings: Logging settings. Uses global settings if not provided.
        debug: Force DEBUG level regardless of the configured level.
    """
    if settings is None:
        settings = get_settings().logging

    level = logging.DEBUG if debug else getattr(logging, settings.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler: RichHandler | logging.StreamHandler
    if settings.use_rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=True,
            show_time=True,
            rich_tracebacks=True,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(settings.format))

    root_logger.addHandler(handler)

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger by name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Configured logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

        if not logging.getLogger().handlers:
            setup_logging()

    return _loggers[name]


def log_settings(options: CompileSettings) -> None:
    """Log every compile option once, when debug logging is enabled."""
    if not options.debug_logging:
        return

    logger = get_logger(__name__)
    logger.debug("SassyFlow initializing.")
    for key, value in options.model_dump().items():
        logger.debug("%s = %s", key, value)
