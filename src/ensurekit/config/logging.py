"""structlog rendering for ensurekit's log records.

Two output modes:
- Human (default): colored console output to stderr
- JSON: structured JSON lines to stderr

The library logs through stdlib ``logging``. :func:`configure_logging`
attaches one structlog-formatted handler to the ``ensurekit`` logger only;
the root logger and the host application's handlers are left untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from ensurekit.config.settings import EnsureSettings

LOGGER_NAME = "ensurekit"


class _EnsureHandler(logging.StreamHandler):
    """Marker type so reconfiguration replaces only our own handler."""


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route ``ensurekit`` records through a structlog ProcessorFormatter.

    Idempotent: a previously installed ensurekit handler is replaced,
    other handlers on the ``ensurekit`` logger are kept.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = _EnsureHandler(sys.stderr)
    handler.setFormatter(formatter)

    ensure_logger = logging.getLogger(LOGGER_NAME)
    for existing in list(ensure_logger.handlers):
        if isinstance(existing, _EnsureHandler):
            ensure_logger.removeHandler(existing)
    ensure_logger.addHandler(handler)
    ensure_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ensure_logger.propagate = False


def configure_from_settings(settings: EnsureSettings) -> None:
    """Apply :func:`configure_logging` with the flags from *settings*."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
