"""
Log renderers and structlog processors.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, TextIO

import orjson
import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from fanlog.config.logging import LogFormat
from fanlog.exceptions import UnknownFormatError


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


# =============================================================================
# Text Formatter (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Human-readable rendering: ``timestamp | LEVEL | message key=value``."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
    }

    EXCLUDED_KEYS = {"level", "message", "event", "timestamp"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    LEVEL_WIDTH = 7
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        level_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
        if level_width:
            cls.LEVEL_WIDTH = level_width
        if separator is not None:
            cls.SEPARATOR = separator

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = False) -> str:
        """Format an event dict into an aligned line."""
        level_upper = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))

        extras = []
        for k, v in event_dict.items():
            if k in cls.EXCLUDED_KEYS:
                continue
            key_text = cls._maybe_color(str(k), "key", use_color)
            value_text = cls._maybe_color(str(v), "dim", use_color)
            extras.append(f"{key_text}={value_text}")
        if extras:
            message = f"{message} " + " ".join(extras)

        level_text = f"{level_upper:<{cls.LEVEL_WIDTH}}"
        if use_color and level_upper in cls._LEVEL_COLORS:
            level_text = f"{cls._LEVEL_COLORS[level_upper]}{level_text}{cls._RESET}"

        timestamp = cls._maybe_color(cls._format_timestamp(event_dict.get("timestamp")), "timestamp", use_color)
        return cls.SEPARATOR.join([timestamp, level_text, message])


# =============================================================================
# Renderers
# =============================================================================


class TextRenderer:
    """Final processor for the text format; colors only when writing to a tty."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        use_color = bool(getattr(self._stream, "isatty", lambda: False)())
        return ConsoleFormatter.format(event_dict, use_color=use_color)


def render_json(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Final processor for the json format."""
    return orjson_dumps(event_dict)


_RENDERERS: dict[LogFormat, Callable[[TextIO], Processor]] = {
    LogFormat.TEXT: TextRenderer,
    LogFormat.JSON: lambda stream: render_json,
}


def renderer_for(fmt: LogFormat, stream: TextIO) -> Processor:
    """Return the final processor rendering ``fmt`` for ``stream``."""
    try:
        factory = _RENDERERS[fmt]
    except KeyError:
        raise UnknownFormatError(fmt) from None
    return factory(stream)


def build_processors(fmt: LogFormat, stream: TextIO) -> list[Processor]:
    """Processor chain shared by every sink: level, timestamp, message, renderer."""
    return [
        structlog.stdlib.add_log_level,
        add_timestamp,
        rename_event_key,
        renderer_for(fmt, stream),
    ]
