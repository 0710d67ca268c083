"""
Fan-out logging core: per-sink filtered loggers and the dispatching ``LogEntry``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Mapping, TextIO

import structlog

from fanlog.config.logging import LogConfig, OutputKind, Severity

from .formatters import build_processors
from .options import SinkOptions
from .sinks import open_stream

Fields = Mapping[str, Any]


# =============================================================================
# Global Gate
# =============================================================================


class LevelGate:
    """Coarse severity filter checked before any sink is consulted."""

    def __init__(self, level: Severity = Severity.DEBUG):
        self.level = Severity.parse(level)

    def allows(self, level: Severity) -> bool:
        return level >= self.level


# Process-wide gate shared by every LogEntry that is not given its own
global_gate = LevelGate()


def _sprint(args: tuple[Any, ...]) -> str:
    return "".join(str(a) for a in args)


def _sprintln(args: tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


# =============================================================================
# Filtered Logger
# =============================================================================


class FilteredLogger:
    """A structlog logger bound to one sink's options and stream.

    Threshold filtering is done by structlog's filtering bound logger. When
    ``single_level`` is set, calls whose level differs from the sink level are
    dropped before they reach it.
    """

    def __init__(self, options: SinkOptions, stream: TextIO):
        self._options = options
        self._stream = stream
        self._logger = structlog.wrap_logger(
            structlog.PrintLogger(file=stream),
            processors=build_processors(options.format, stream),
            wrapper_class=structlog.make_filtering_bound_logger(options.level.engine_level),
            context_class=dict,
        ).bind()

    @property
    def options(self) -> SinkOptions:
        return self._options

    @property
    def level(self) -> Severity:
        return self._options.level

    @property
    def single_level(self) -> bool:
        return self._options.single_level

    def accepts(self, level: Severity) -> bool:
        return not self._options.single_level or level == self._options.level

    def log(self, level: Severity, *args: Any) -> None:
        if self.accepts(level):
            self._logger.log(level.engine_level, _sprint(args))

    def logf(self, level: Severity, fmt: str, *args: Any) -> None:
        if self.accepts(level):
            self._logger.log(level.engine_level, _sprintf(fmt, args))

    def logln(self, level: Severity, *args: Any) -> None:
        if self.accepts(level):
            self._logger.log(level.engine_level, _sprintln(args))

    def with_fields(self, level: Severity, fields: Fields) -> Any | None:
        """Bound logger carrying ``fields``, or None when this sink rejects ``level``."""
        if not self.accepts(level):
            return None
        return self._logger.bind(**fields)

    def close(self) -> None:
        # stdout is shared with the rest of the process
        if self._options.out_type == OutputKind.FILE:
            self._stream.close()


def new_filtered_logger(options: SinkOptions) -> FilteredLogger | None:
    """Materialize the sink of ``options``; None when no sink applies."""
    if options.disabled:
        return None
    stream = open_stream(options)
    if stream is None:
        return None
    return FilteredLogger(options, stream)


# =============================================================================
# Dispatcher
# =============================================================================


class LogEntry:
    """Fans every log call out to its filtered loggers, in construction order.

    A call below the gate level returns before any sink is touched. A sink that
    raises does not prevent delivery to the others, and no error reaches the
    caller.
    """

    def __init__(self, loggers: Iterable[FilteredLogger] = (), *, gate: LevelGate | None = None):
        self._loggers = tuple(loggers)
        self._gate = gate if gate is not None else global_gate

    @property
    def sinks(self) -> tuple[FilteredLogger, ...]:
        return self._loggers

    @property
    def gate(self) -> LevelGate:
        return self._gate

    def __len__(self) -> int:
        return len(self._loggers)

    def __iter__(self) -> Iterator[FilteredLogger]:
        return iter(self._loggers)

    def close(self) -> None:
        for sink in self._loggers:
            sink.close()

    # -------------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------------

    def _fan_out(self, call: Callable[[FilteredLogger], None]) -> None:
        for sink in self._loggers:
            try:
                call(sink)
            except Exception:
                pass  # Remaining sinks still receive the record

    def _withs(self, level: Severity, fields: Fields) -> list[Any]:
        entries = []
        for sink in self._loggers:
            try:
                bound = sink.with_fields(level, fields)
            except Exception:
                continue
            if bound is not None:
                entries.append(bound)
        return entries

    def _emitln(self, level: Severity, args: tuple[Any, ...]) -> None:
        if not self._gate.allows(level):
            return
        self._fan_out(lambda sink: sink.logln(level, *args))

    def _emitf(self, level: Severity, fmt: str, args: tuple[Any, ...]) -> None:
        if not self._gate.allows(level):
            return
        self._fan_out(lambda sink: sink.logf(level, fmt, *args))

    def _emit_with(self, level: Severity, fields: Fields, message: Callable[[], str]) -> None:
        if not self._gate.allows(level):
            return
        entries = self._withs(level, fields)
        if not entries:
            return
        try:
            rendered = message()
        except Exception:
            return
        for bound in entries:
            try:
                bound.log(level.engine_level, rendered)
            except Exception:
                pass  # Remaining sinks still receive the record

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def debug(self, *args: Any) -> None:
        self._emitln(Severity.DEBUG, args)

    def info(self, *args: Any) -> None:
        self._emitln(Severity.INFO, args)

    def warn(self, *args: Any) -> None:
        self._emitln(Severity.WARN, args)

    def error(self, *args: Any) -> None:
        self._emitln(Severity.ERROR, args)

    def debugf(self, fmt: str, *args: Any) -> None:
        self._emitf(Severity.DEBUG, fmt, args)

    def infof(self, fmt: str, *args: Any) -> None:
        self._emitf(Severity.INFO, fmt, args)

    def warnf(self, fmt: str, *args: Any) -> None:
        self._emitf(Severity.WARN, fmt, args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._emitf(Severity.ERROR, fmt, args)

    def debug_with(self, fields: Fields, *args: Any) -> None:
        self._emit_with(Severity.DEBUG, fields, lambda: _sprintln(args))

    def info_with(self, fields: Fields, *args: Any) -> None:
        self._emit_with(Severity.INFO, fields, lambda: _sprintln(args))

    def warn_with(self, fields: Fields, *args: Any) -> None:
        self._emit_with(Severity.WARN, fields, lambda: _sprintln(args))

    def error_with(self, fields: Fields, *args: Any) -> None:
        self._emit_with(Severity.ERROR, fields, lambda: _sprintln(args))

    def debugf_with(self, fields: Fields, fmt: str, *args: Any) -> None:
        self._emit_with(Severity.DEBUG, fields, lambda: _sprintf(fmt, args))

    def infof_with(self, fields: Fields, fmt: str, *args: Any) -> None:
        self._emit_with(Severity.INFO, fields, lambda: _sprintf(fmt, args))

    def warnf_with(self, fields: Fields, fmt: str, *args: Any) -> None:
        self._emit_with(Severity.WARN, fields, lambda: _sprintf(fmt, args))

    def errorf_with(self, fields: Fields, fmt: str, *args: Any) -> None:
        self._emit_with(Severity.ERROR, fields, lambda: _sprintf(fmt, args))


def new_log_entry(*configs: LogConfig, gate: LevelGate | None = None) -> LogEntry:
    """Build a LogEntry from sink configurations.

    Disabled entries and unknown output kinds yield no sink; the remaining sinks
    keep their input order.

    Raises:
        LoggingConfigError: If a file sink cannot be opened
    """
    return new_log_entry_from_options(*(c.option() for c in configs), gate=gate)


def new_log_entry_from_options(*options: SinkOptions, gate: LevelGate | None = None) -> LogEntry:
    """Build a LogEntry directly from sink options."""
    loggers = []
    for op in options:
        logger = new_filtered_logger(op)
        if logger is not None:
            loggers.append(logger)
    return LogEntry(loggers, gate=gate)
