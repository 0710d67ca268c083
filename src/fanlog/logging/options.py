"""
Immutable per-sink runtime options.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from fanlog.config.logging import LogConfig, LogFormat, OutputKind, Severity


@dataclass(frozen=True)
class SinkOptions:
    """Runtime options of one sink.

    Age-based retention wins over count-based retention: a non-zero
    ``max_age`` forces ``max_count`` to zero.
    """

    level: Severity = Severity.DEBUG
    format: LogFormat = LogFormat.TEXT
    out_type: OutputKind | str = OutputKind.CONSOLE
    out_dir: str = ""
    max_age: timedelta = timedelta(0)
    max_count: int = 0
    single_level: bool = False
    disabled: bool = False

    def __post_init__(self) -> None:
        if self.max_age and self.max_count:
            object.__setattr__(self, "max_count", 0)

    @classmethod
    def from_config(cls, config: LogConfig) -> SinkOptions:
        return cls(
            level=config.level,
            format=config.format,
            out_type=OutputKind.coerce(config.out_type),
            out_dir=config.out_dir,
            max_age=timedelta(hours=config.max_age),
            max_count=config.max_count,
            single_level=config.single_level,
            disabled=config.disabled,
        )

    @classmethod
    def fallback(cls) -> SinkOptions:
        """Console sink at DEBUG in text format, used when nothing is configured."""
        return cls(level=Severity.DEBUG, format=LogFormat.TEXT, out_type=OutputKind.CONSOLE)
