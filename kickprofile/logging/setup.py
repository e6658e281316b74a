"""Structlog configuration for kickprofile.

Loggers handed out by get_logger are lazy proxies: they resolve level,
processors and renderer on every call, so module-level loggers created
at import time follow whatever configure_logging installed last.
Standard library records (uvicorn, httpx) are rendered through the same
pipeline via a ProcessorFormatter on the root logger.
"""

import logging
import sys

import structlog

from kickprofile.config import ResolverConfig, LogFormat

HANDLER_NAME = "kickprofile"


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: LogFormat, stream) -> list:
    if log_format == LogFormat.JSON:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.set_exc_info, structlog.dev.ConsoleRenderer(colors=stream.isatty())]


class _StdoutHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout is at emit time."""

    @property
    def stream(self):
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass


def _install_stdlib_handler(level: int, renderer: list) -> None:
    """Replace our root handler; handlers installed by others are left alone."""
    handler = _StdoutHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[structlog.stdlib.add_logger_name, *_shared_processors()],
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


def configure_logging(config: ResolverConfig | None = None) -> None:
    """
    Apply the configured level and format to structlog and stdlib logging.

    Safe to call repeatedly; the last call wins, including for loggers
    obtained earlier.

    Args:
        config: ResolverConfig instance, uses defaults if None
    """
    if config is None:
        config = ResolverConfig()

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    stream = sys.stdout
    renderer = _renderer(config.log_format, stream)

    _install_stdlib_handler(level, renderer)

    structlog.configure(
        processors=[*_shared_processors(), *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None):
    """Lazy structlog logger, tagged with logger_name when given."""
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
