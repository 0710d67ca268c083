"""
Logging Configuration.

Enumerations shared by the whole package, the per-sink ``LogConfig`` schema
read from ``config.yml`` and the environment-driven ``FanlogSettings``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from fanlog.exceptions import UnknownFormatError, UnknownLevelError

if TYPE_CHECKING:
    from fanlog.logging.options import SinkOptions


# =============================================================================
# Enumerations
# =============================================================================


class Severity(str, Enum):
    """Ordered log severity: DEBUG < INFO < WARN < ERROR."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Severity | str) -> Severity:
        if isinstance(value, cls):
            return value
        label = str(value).strip().lower()
        label = _LEVEL_ALIASES.get(label, label)
        try:
            return cls(label)
        except ValueError:
            raise UnknownLevelError(value) from None

    @property
    def engine_level(self) -> int:
        """Numeric level understood by structlog's filtering bound loggers."""
        try:
            return _ENGINE_LEVELS[self]
        except KeyError:
            raise UnknownLevelError(self.value) from None

    # str comparison would order labels alphabetically
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.engine_level < other.engine_level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.engine_level <= other.engine_level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.engine_level > other.engine_level

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.engine_level >= other.engine_level


_LEVEL_ALIASES = {"warning": "warn"}

_ENGINE_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LogFormat(str, Enum):
    TEXT = "text"
    JSON = "json"

    @classmethod
    def parse(cls, value: LogFormat | str) -> LogFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownFormatError(value) from None


class OutputKind(str, Enum):
    CONSOLE = "console"
    FILE = "file"

    @classmethod
    def coerce(cls, value: OutputKind | str) -> OutputKind | str:
        """Return the matching kind, or the raw label when it is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return value


# =============================================================================
# Sink Configuration Schema
# =============================================================================


class LogConfig(BaseModel):
    """One sink entry of the ``fanlog.log`` list."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    level: Severity = Field(default=Severity.DEBUG, description="Sink severity threshold")
    format: LogFormat = Field(default=LogFormat.TEXT, description="Rendering format")
    out_type: str = Field(default=OutputKind.CONSOLE.value, description="console or file")
    out_dir: str = Field(default="", description="Directory for file sinks")
    max_age: int = Field(default=0, ge=0, description="Retention age in hours")
    max_count: int = Field(default=0, ge=0, description="Number of rotated files to keep")
    single_level: bool = Field(default=False, description="Only accept records at exactly `level`")
    disabled: bool = Field(default=False, description="Skip this sink entirely")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Severity:
        return Severity.parse(value)

    @field_validator("format", mode="before")
    @classmethod
    def _parse_format(cls, value: Any) -> LogFormat:
        return LogFormat.parse(value)

    def option(self) -> SinkOptions:
        """Convert to the immutable runtime options of a sink."""
        # Imported here to avoid a circular import through fanlog.logging
        from fanlog.logging.options import SinkOptions

        return SinkOptions.from_config(self)


class FanlogSection(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    log: list[LogConfig] = Field(default_factory=list)


class RootConfig(BaseModel):
    """Root of a config file; other top-level sections are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    fanlog: FanlogSection = Field(default_factory=FanlogSection)


# =============================================================================
# Process Settings
# =============================================================================


class FanlogSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FANLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    config_files: tuple[str, ...] = Field(
        default=("config.yml", "config.yaml"),
        description="Config file candidates, probed in order",
    )
    global_level: Severity = Field(default=Severity.DEBUG, description="Process-wide severity gate")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Text format timestamp",
    )
    console_level_width: int = Field(default=7, description="Text format level column width")
    console_separator: str = Field(default=" | ", description="Text format column separator")

    @field_validator("global_level", mode="before")
    @classmethod
    def _parse_global_level(cls, value: Any) -> Severity:
        return Severity.parse(value)
