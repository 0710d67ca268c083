"""
fanlog: configuration-driven, multi-sink structured logging.

Usage:
    import fanlog

    fanlog.info("service started on port", 8080)
    fanlog.errorf_with({"user": "a"}, "login failed after %d attempts", 3)
"""

from fanlog.config import LogConfig, LogFormat, OutputKind, Severity
from fanlog.exceptions import FanlogError, LoggingConfigError, UnknownFormatError, UnknownLevelError
from fanlog.logging import (
    Fields,
    LogEntry,
    Operation,
    SinkOptions,
    after_init,
    get_default,
    init_logging,
    new_log_entry,
    new_log_entry_from_options,
    set_global_level,
    setup,
)
from fanlog.logging.default import (
    debug,
    debug_with,
    debugf,
    debugf_with,
    error,
    error_with,
    errorf,
    errorf_with,
    info,
    info_with,
    infof,
    infof_with,
    warn,
    warn_with,
    warnf,
    warnf_with,
)

__all__ = [
    "FanlogError",
    "Fields",
    "LogConfig",
    "LogEntry",
    "LogFormat",
    "LoggingConfigError",
    "Operation",
    "OutputKind",
    "Severity",
    "SinkOptions",
    "UnknownFormatError",
    "UnknownLevelError",
    "after_init",
    "debug",
    "debug_with",
    "debugf",
    "debugf_with",
    "error",
    "error_with",
    "errorf",
    "errorf_with",
    "get_default",
    "info",
    "info_with",
    "infof",
    "infof_with",
    "init_logging",
    "new_log_entry",
    "new_log_entry_from_options",
    "set_global_level",
    "setup",
    "warn",
    "warn_with",
    "warnf",
    "warnf_with",
]
