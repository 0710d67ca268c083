"""
Time-rotated file writer.
"""

from __future__ import annotations

import glob
import re
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import IO, Callable

from .diagnostics import get_logger

logger = get_logger(__name__)


class DailyRotatingWriter:
    """File-like writer whose target name is a strftime pattern.

    The active file is ``rotation_start.strftime(pattern)``; a new file is opened
    when the clock crosses into the next rotation period. After each rotation,
    older files matching the pattern are purged by ``max_age`` or, alternatively,
    by ``rotation_count`` (the newest N files are kept, the active one included).
    Setting both is rejected.

    Args:
        pattern: Path pattern, e.g. ``log/info/%Y-%m-%d.log``
        rotation_time: Length of one rotation period
        max_age: Delete files older than this (0 disables)
        rotation_count: Keep this many files (0 disables)
        clock: Returns the current local time
    """

    def __init__(
        self,
        pattern: str | Path,
        *,
        rotation_time: timedelta = timedelta(days=1),
        max_age: timedelta = timedelta(0),
        rotation_count: int = 0,
        clock: Callable[[], datetime] | None = None,
    ):
        if max_age and rotation_count:
            raise ValueError("max_age and rotation_count cannot both be set")
        if rotation_time <= timedelta(0):
            raise ValueError("rotation_time must be positive")
        if rotation_count < 0:
            raise ValueError("rotation_count must not be negative")

        self._pattern = str(pattern)
        self._glob = re.sub(r"%[A-Za-z]", "*", self._pattern)
        self._rotation_time = rotation_time
        self._max_age = max_age
        self._rotation_count = rotation_count
        self._clock = clock or datetime.now
        self._lock = threading.Lock()
        self._file: IO[str] | None = None
        self._current_path: Path | None = None
        self._closed = False

        # Open eagerly so an unwritable location fails at construction
        with self._lock:
            self._rotate_if_needed()

    @property
    def current_path(self) -> Path | None:
        return self._current_path

    def _period_start(self, now: datetime) -> datetime:
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        day = timedelta(days=1)
        if self._rotation_time >= day:
            days = self._rotation_time // day
            return midnight - timedelta(days=midnight.toordinal() % days)
        return midnight + ((now - midnight) // self._rotation_time) * self._rotation_time

    def _rotate_if_needed(self) -> None:
        now = self._clock()
        path = Path(self._period_start(now).strftime(self._pattern))
        if self._file is not None and path == self._current_path:
            return

        path.parent.mkdir(parents=True, exist_ok=True)
        new_file = open(path, "a", encoding="utf-8")
        if self._file is not None:
            self._file.close()
        self._file = new_file
        self._current_path = path
        self._purge(now)

    def _purge(self, now: datetime) -> None:
        if not self._max_age and not self._rotation_count:
            return

        candidates = [Path(p) for p in glob.glob(self._glob)]
        candidates = [p for p in candidates if p.is_file() and p != self._current_path]

        if self._max_age:
            cutoff = (now - self._max_age).timestamp()
            expired = [p for p in candidates if p.stat().st_mtime < cutoff]
        else:
            # The active file counts towards the kept files
            keep_old = self._rotation_count - 1
            candidates.sort(key=lambda p: (p.stat().st_mtime, p.name))
            expired = candidates[: max(len(candidates) - keep_old, 0)]

        for path in expired:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("log_purge_failed", path=str(path), error=str(exc))

    def write(self, s: str) -> int:
        with self._lock:
            if self._closed:
                raise ValueError("I/O operation on closed file")
            self._rotate_if_needed()
            return self._file.write(s)

    def flush(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.flush()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._file is not None:
                self._file.close()
                self._file = None

    def isatty(self) -> bool:
        return False
