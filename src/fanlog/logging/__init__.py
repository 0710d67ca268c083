"""
Fan-out logging for fanlog.

Each configured sink (console or daily rotated file) gets its own structlog
logger with its own threshold and format; a ``LogEntry`` delivers every call
to all of them.

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for rendering.
"""

from .core import (
    Fields,
    FilteredLogger,
    LevelGate,
    LogEntry,
    global_gate,
    new_filtered_logger,
    new_log_entry,
    new_log_entry_from_options,
)
from .default import (
    Operation,
    after_init,
    get_default,
    init_logging,
    reset_default,
    set_default,
    set_global_level,
    setup,
)
from .options import SinkOptions
from .sinks import ConsoleSink, FileSink, OutputSink, open_stream

__all__ = [
    "ConsoleSink",
    "Fields",
    "FileSink",
    "FilteredLogger",
    "LevelGate",
    "LogEntry",
    "Operation",
    "OutputSink",
    "SinkOptions",
    "after_init",
    "get_default",
    "global_gate",
    "init_logging",
    "new_filtered_logger",
    "new_log_entry",
    "new_log_entry_from_options",
    "open_stream",
    "reset_default",
    "set_default",
    "set_global_level",
    "setup",
]
