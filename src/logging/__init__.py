"""Logging configuration and handlers."""

from src.logging.logger import get_logger, log_run, setup_logging

__all__ = ["get_logger", "log_run", "setup_logging"]
