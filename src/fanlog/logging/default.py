"""
Process-wide default LogEntry and the free convenience functions.

The default is built lazily on first use by discovery:

1. explicit configs handed to ``after_init``/``setup``
2. the first existing file of ``settings.config_files`` (``config.yml``, then ``config.yaml``)
3. a single console sink at DEBUG in text format

``get_default`` raises ``LoggingConfigError`` on unusable configuration; the
free functions abort the process instead, like ``init_logging``.

Replacing the default is a plain reference swap meant for startup, before
concurrent logging begins.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NoReturn

from fanlog.config import FanlogSettings, discover_config_file, load_log_configs
from fanlog.config import settings as default_settings
from fanlog.config.logging import LogConfig, Severity
from fanlog.exceptions import LoggingConfigError

from .core import Fields, LogEntry, global_gate, new_log_entry, new_log_entry_from_options
from .formatters import ConsoleFormatter
from .options import SinkOptions

# =============================================================================
# Global State
# =============================================================================

_log: LogEntry | None = None


def discover_configs(settings: FanlogSettings | None = None) -> list[LogConfig]:
    """Sink configs from the first config file found, or an empty list."""
    settings = settings or default_settings
    path = discover_config_file(settings.config_files)
    if path is None:
        return []
    return load_log_configs(path)


def build_default(settings: FanlogSettings | None = None) -> LogEntry:
    """Build a LogEntry from discovered configuration or the console fallback.

    Raises:
        LoggingConfigError: If the discovered configuration is unusable
    """
    configs = discover_configs(settings)
    if not configs:
        return new_log_entry_from_options(SinkOptions.fallback())
    return new_log_entry(*configs)


def get_default() -> LogEntry:
    global _log
    if _log is None:
        _log = build_default()
    return _log


def set_default(entry: LogEntry) -> None:
    global _log
    _log = entry


def reset_default() -> None:
    """Forget the default; the next access rediscovers configuration."""
    global _log
    _log = None


def set_global_level(level: Severity | str) -> None:
    global_gate.level = Severity.parse(level)


# =============================================================================
# Setup Operations
# =============================================================================


@dataclass
class Operation:
    """Pending replacement of the default LogEntry."""

    configs: list[LogConfig] = field(default_factory=list)

    def setup(self) -> None:
        """Swap the default when configs were supplied; otherwise do nothing."""
        if self.configs:
            set_default(new_log_entry(*self.configs))


def after_init(config_file: str | Path | None = None, *configs: LogConfig) -> Operation:
    """Collect the configuration for a later ``Operation.setup()``.

    Explicit ``configs`` win over ``config_file``; a missing file yields an
    empty operation.
    """
    if configs:
        return Operation(list(configs))
    if config_file and Path(config_file).is_file():
        return Operation(load_log_configs(config_file))
    return Operation()


def setup(*configs: LogConfig) -> None:
    Operation(list(configs)).setup()


def init_logging(
    config_file: str | Path | None = None,
    *configs: LogConfig,
    settings: FanlogSettings | None = None,
) -> LogEntry:
    """
    Configure the process-wide default at application startup.

    Applies the settings (global level, text rendering), then installs the
    default from explicit configs, ``config_file``, discovery or the fallback,
    in that order. An unusable configuration aborts the process.

    Args:
        config_file: Config file to use instead of discovery
        configs: Sink configurations, taking precedence over any file
        settings: Settings to apply (default: ``fanlog.config.settings``)

    Raises:
        SystemExit: If the logging configuration is unusable
    """
    settings = settings or default_settings
    set_global_level(settings.global_level)
    ConsoleFormatter.configure(
        timestamp_format=settings.console_timestamp_format,
        level_width=settings.console_level_width,
        separator=settings.console_separator,
    )

    try:
        operation = after_init(config_file, *configs)
        if operation.configs:
            operation.setup()
        else:
            set_default(build_default(settings))
    except LoggingConfigError as exc:
        _abort(exc)

    return get_default()


def _abort(exc: LoggingConfigError) -> NoReturn:
    sys.stderr.write(f"fanlog: {exc}\n")
    raise SystemExit(1) from exc


def _resolve() -> LogEntry:
    """The default for the free functions; unusable configuration aborts the process."""
    try:
        return get_default()
    except LoggingConfigError as exc:
        _abort(exc)


# =============================================================================
# Convenience Functions
# =============================================================================


def debug(*args: Any) -> None:
    _resolve().debug(*args)


def info(*args: Any) -> None:
    _resolve().info(*args)


def warn(*args: Any) -> None:
    _resolve().warn(*args)


def error(*args: Any) -> None:
    _resolve().error(*args)


def debugf(fmt: str, *args: Any) -> None:
    _resolve().debugf(fmt, *args)


def infof(fmt: str, *args: Any) -> None:
    _resolve().infof(fmt, *args)


def warnf(fmt: str, *args: Any) -> None:
    _resolve().warnf(fmt, *args)


def errorf(fmt: str, *args: Any) -> None:
    _resolve().errorf(fmt, *args)


def debug_with(fields: Fields, *args: Any) -> None:
    _resolve().debug_with(fields, *args)


def info_with(fields: Fields, *args: Any) -> None:
    _resolve().info_with(fields, *args)


def warn_with(fields: Fields, *args: Any) -> None:
    _resolve().warn_with(fields, *args)


def error_with(fields: Fields, *args: Any) -> None:
    _resolve().error_with(fields, *args)


def debugf_with(fields: Fields, fmt: str, *args: Any) -> None:
    _resolve().debugf_with(fields, fmt, *args)


def infof_with(fields: Fields, fmt: str, *args: Any) -> None:
    _resolve().infof_with(fields, fmt, *args)


def warnf_with(fields: Fields, fmt: str, *args: Any) -> None:
    _resolve().warnf_with(fields, fmt, *args)


def errorf_with(fields: Fields, fmt: str, *args: Any) -> None:
    _resolve().errorf_with(fields, fmt, *args)
