"""
Internal diagnostics for fanlog itself (skipped sinks, retention purges).

These never go through a ``LogEntry``. They are handed to the stdlib logger
``fanlog``, which only carries a ``NullHandler``: nothing is printed unless the
host application configures stdlib logging.
"""

from __future__ import annotations

import logging

import structlog

logging.getLogger("fanlog").addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger writing to the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name or "fanlog"),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
