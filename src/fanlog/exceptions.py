"""
Fanlog exception hierarchy.

Configuration problems are fatal at startup and surface as ``LoggingConfigError``;
the core never terminates the process itself, the application layer decides.
Unknown enum labels are programming errors and surface as ``ValueError`` subclasses.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FanlogError(Exception):
    """Root of all fanlog exceptions.

    Carries a stable ``code`` and free-form ``details`` so callers can report
    the failure without parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class LoggingConfigError(FanlogError):
    """Unusable logging configuration.

    Raised for malformed or unreadable config files, failed directory creation
    and failed rotation writer initialization.
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="LOGGING_CONFIG_ERROR", details=details)


class UnknownLevelError(FanlogError, ValueError):
    """Unrecognized severity label."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"unknown log level: {value!r}",
            code="UNKNOWN_LEVEL",
            details={"value": value},
        )


class UnknownFormatError(FanlogError, ValueError):
    """Unrecognized format label."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"unknown log format: {value!r}",
            code="UNKNOWN_FORMAT",
            details={"value": value},
        )
