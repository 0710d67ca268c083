"""
Output sinks: turn ``SinkOptions`` into a writable stream.
"""

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import TextIO

from fanlog.config.logging import OutputKind
from fanlog.exceptions import LoggingConfigError

from .diagnostics import get_logger
from .io import DailyRotatingWriter
from .options import SinkOptions

logger = get_logger(__name__)

ROTATION_PATTERN = "%Y-%m-%d.log"
ROTATION_TIME = timedelta(hours=24)


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class OutputSink(ABC):
    """One log destination."""

    @abstractmethod
    def open(self) -> TextIO:
        """Materialize the writable stream of this destination."""
        ...


class ConsoleSink(OutputSink):
    """Standard output."""

    def open(self) -> TextIO:
        return sys.stdout


class FileSink(OutputSink):
    """Daily rotated files under ``<directory>/%Y-%m-%d.log``."""

    def __init__(self, options: SinkOptions):
        self._options = options
        self.directory = resolve_directory(options)
        self.max_age = options.max_age
        self.max_count = 0 if options.max_age else options.max_count

    def open(self) -> DailyRotatingWriter:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LoggingConfigError(
                f"cannot create log directory {self.directory}: {exc}",
                details={"directory": str(self.directory)},
            ) from exc

        try:
            return DailyRotatingWriter(
                self.directory / ROTATION_PATTERN,
                rotation_time=ROTATION_TIME,
                max_age=self.max_age,
                rotation_count=self.max_count,
            )
        except (OSError, ValueError) as exc:
            raise LoggingConfigError(
                f"cannot open rotating log writer in {self.directory}: {exc}",
                details={"directory": str(self.directory)},
            ) from exc


def resolve_directory(options: SinkOptions) -> Path:
    """``out_dir`` without trailing separators, or ``log/<level name>`` when empty.

    Level names are the engine's: debug, info, warning, error.
    """
    level_name = logging.getLevelName(options.level.engine_level).lower()
    directory = options.out_dir or f"log/{level_name}"
    trimmed = directory.rstrip("/" + os.sep)
    return Path(trimmed or directory)


def sink_for(options: SinkOptions) -> OutputSink | None:
    """Select the sink for ``options``; None when disabled or the kind is unknown."""
    if options.disabled:
        return None
    if options.out_type == OutputKind.CONSOLE:
        return ConsoleSink()
    if options.out_type == OutputKind.FILE:
        return FileSink(options)
    logger.debug("sink_skipped", out_type=str(options.out_type))
    return None


def open_stream(options: SinkOptions) -> TextIO | None:
    """Materialize the stream for ``options``.

    Raises:
        LoggingConfigError: If a file sink cannot be opened
    """
    sink = sink_for(options)
    if sink is None:
        return None
    return sink.open()
