"""Structured logging configuration using structlog.

structlog renders each event (console or JSON) and hands the finished line to
the standard library, so the stderr handler and the optional ``LOG_FILE``
handler receive the same lines. stdout is left to the CLI's rich output.
"""

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import Processor

# Libraries that log every HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "supabase")


def _renderer(log_format: str, colors: bool) -> list[Processor]:
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=colors,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def setup_logging(
    level: str = "INFO",
    log_format: str = "console",
    log_file: str | None = None,
) -> None:
    """Configure structured logging for a CLI run.

    Safe to call more than once: previous handlers are replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format ("console" for pretty, "json" for structured)
        log_file: Optional file that receives the same lines as stderr
    """
    log_level = getattr(logging, level.upper())

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=handlers,
        force=True,
    )

    third_party_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    # ANSI colors would end up in the log file
    colors = sys.stderr.isatty() and not log_file

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(log_format, colors),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


class LogContext:
    """Context manager for adding temporary context to logs."""

    def __init__(self, **kwargs: str | int | float | bool) -> None:
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: object) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def log_run(mode: str, dry_run: bool, sources: str = "*") -> LogContext:
    """Bind reconciliation run details (mode, dry run, sources) to every log line."""
    return LogContext(mode=mode, dry_run=dry_run, sources=sources)
