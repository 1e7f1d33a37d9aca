"""Logging module."""

from sassyflow.core.logger.logger import get_logger, log_settings, setup_logging

__all__ = ["get_logger", "log_settings", "setup_logging"]
