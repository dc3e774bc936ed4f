"""structlog setup for the interpreter.

Narration owns stdout, so log records go to stderr, or to the log file
when one is configured. Every record carries the component that wrote
it, e.g. ``engine.dwarves``.
"""

import sys
from typing import Any, TextIO

import structlog

from .config import Config

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

_PACKAGE = "crowther."


def component_name(module: str) -> str:
    """``crowther.engine.game`` logs as ``engine.game``."""
    return module.removeprefix(_PACKAGE)


def _log_stream(config: Config) -> TextIO:
    if config.log_file:
        return open(config.log_file, "a", buffering=1)
    return sys.stderr


def _renderers(config: Config, stream: TextIO) -> list[Any]:
    if config.json_logs:
        return [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.dev.ConsoleRenderer(colors=stream.isatty()),
    ]


def configure_logging(config: Config) -> None:
    """Point structlog at the configured stream, level and format."""
    stream = _log_stream(config)
    level = LEVELS.get(config.log_level.upper(), LEVELS["WARNING"])

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            *_renderers(config, stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger for a module, tagged with its component."""
    return structlog.get_logger(name, component=component_name(name))
