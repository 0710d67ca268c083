import io

import pytest

from fanlog.config.logging import LogFormat, OutputKind, Severity
from fanlog.logging import FilteredLogger, SinkOptions, global_gate, reset_default


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """
    Runs every test in an empty working directory with a fresh process default.
    Config discovery therefore never sees files of the repository, and the
    process-wide gate is restored afterwards.
    """
    monkeypatch.chdir(tmp_path)
    previous_level = global_gate.level
    reset_default()
    yield
    global_gate.level = previous_level
    reset_default()


@pytest.fixture
def make_sink():
    """Factory for a FilteredLogger writing into an in-memory stream."""

    def _make(
        level: Severity = Severity.DEBUG,
        *,
        single_level: bool = False,
        fmt: LogFormat = LogFormat.TEXT,
    ) -> tuple[FilteredLogger, io.StringIO]:
        stream = io.StringIO()
        options = SinkOptions(level=level, format=fmt, out_type=OutputKind.CONSOLE, single_level=single_level)
        return FilteredLogger(options, stream), stream

    return _make
