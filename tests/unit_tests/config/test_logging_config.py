"""
Configuration unit tests

Enum parsing and ordering, the LogConfig schema and YAML loading.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from fanlog.config import (
    FanlogSettings,
    LogConfig,
    LogFormat,
    OutputKind,
    Severity,
    discover_config_file,
    load_log_configs,
)
from fanlog.exceptions import LoggingConfigError, UnknownFormatError, UnknownLevelError


class TestSeverity:
    def test_total_order(self) -> None:
        assert Severity.DEBUG < Severity.INFO < Severity.WARN < Severity.ERROR
        assert Severity.ERROR >= Severity.WARN
        assert not Severity.INFO > Severity.WARN

    def test_order_is_not_alphabetical(self) -> None:
        # "error" < "info" alphabetically
        assert Severity.ERROR > Severity.INFO

    def test_parse_is_case_insensitive_and_accepts_warning(self) -> None:
        assert Severity.parse("INFO") is Severity.INFO
        assert Severity.parse("warning") is Severity.WARN
        assert Severity.parse(Severity.ERROR) is Severity.ERROR

    def test_parse_unknown_label_raises(self) -> None:
        with pytest.raises(UnknownLevelError) as exc_info:
            Severity.parse("verbose")
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.code == "UNKNOWN_LEVEL"

    def test_engine_levels_follow_stdlib_numbers(self) -> None:
        assert [s.engine_level for s in Severity] == [10, 20, 30, 40]


class TestFormatAndKind:
    def test_format_parse(self) -> None:
        assert LogFormat.parse("JSON") is LogFormat.JSON

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(UnknownFormatError):
            LogFormat.parse("xml")

    def test_unknown_output_kind_is_kept_raw(self) -> None:
        assert OutputKind.coerce("file") is OutputKind.FILE
        assert OutputKind.coerce("syslog") == "syslog"


class TestLogConfig:
    def test_defaults(self) -> None:
        config = LogConfig()
        assert config.level is Severity.DEBUG
        assert config.format is LogFormat.TEXT
        assert config.out_type == "console"
        assert config.out_dir == ""
        assert config.max_age == 0
        assert config.max_count == 0
        assert config.single_level is False
        assert config.disabled is False

    def test_camel_case_keys(self) -> None:
        config = LogConfig.model_validate(
            {
                "level": "warn",
                "format": "json",
                "outType": "file",
                "outDir": "var/log",
                "maxAge": 48,
                "singleLevel": True,
                "disabled": True,
            }
        )
        assert config.level is Severity.WARN
        assert config.format is LogFormat.JSON
        assert config.out_type == "file"
        assert config.out_dir == "var/log"
        assert config.max_age == 48
        assert config.single_level is True
        assert config.disabled is True

    def test_option_converts_hours_and_kind(self) -> None:
        option = LogConfig(level="error", out_type="file", max_age=24).option()
        assert option.level is Severity.ERROR
        assert option.out_type is OutputKind.FILE
        assert option.max_age == timedelta(hours=24)

    def test_max_age_wins_over_max_count(self) -> None:
        option = LogConfig(max_age=24, max_count=5).option()
        assert option.max_count == 0

    def test_max_count_kept_without_max_age(self) -> None:
        option = LogConfig(max_count=5).option()
        assert option.max_count == 5

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogConfig(level="loud")

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogConfig(format="xml")

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogConfig(max_count=-1)

    def test_frozen(self) -> None:
        config = LogConfig()
        with pytest.raises(ValidationError):
            config.level = Severity.ERROR  # type: ignore[misc]


class TestSettings:
    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("FANLOG_GLOBAL_LEVEL", "WARNING")
        settings = FanlogSettings()
        assert settings.global_level is Severity.WARN

    def test_default_candidates_prefer_short_extension(self) -> None:
        assert FanlogSettings().config_files == ("config.yml", "config.yaml")


class TestLoader:
    def test_load_sink_list(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text(
            """
app:
  name: demo
fanlog:
  log:
    - level: info
      format: text
      outType: console
    - level: error
      format: json
      outType: file
      outDir: log/errors
      maxCount: 7
      singleLevel: true
""",
            encoding="utf-8",
        )

        configs = load_log_configs(path)

        assert [c.level for c in configs] == [Severity.INFO, Severity.ERROR]
        assert configs[1].format is LogFormat.JSON
        assert configs[1].out_dir == "log/errors"
        assert configs[1].max_count == 7
        assert configs[1].single_level is True

    def test_empty_file_yields_no_configs(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_log_configs(path) == []

    def test_missing_section_yields_no_configs(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("other: 1\n", encoding="utf-8")
        assert load_log_configs(path) == []

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("fanlog: [unclosed\n", encoding="utf-8")
        with pytest.raises(LoggingConfigError):
            load_log_configs(path)

    def test_invalid_level_in_file(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("fanlog:\n  log:\n    - level: loud\n", encoding="utf-8")
        with pytest.raises(LoggingConfigError) as exc_info:
            load_log_configs(path)
        assert exc_info.value.code == "LOGGING_CONFIG_ERROR"
        assert exc_info.value.details["path"] == str(path)

    def test_unreadable_file(self, tmp_path) -> None:
        with pytest.raises(LoggingConfigError):
            load_log_configs(tmp_path / "absent.yml")


class TestDiscovery:
    def test_short_extension_first(self, tmp_path) -> None:
        (tmp_path / "config.yml").write_text("", encoding="utf-8")
        (tmp_path / "config.yaml").write_text("", encoding="utf-8")
        found = discover_config_file(("config.yml", "config.yaml"), tmp_path)
        assert found == tmp_path / "config.yml"

    def test_falls_back_to_long_extension(self, tmp_path) -> None:
        (tmp_path / "config.yaml").write_text("", encoding="utf-8")
        found = discover_config_file(("config.yml", "config.yaml"), tmp_path)
        assert found == tmp_path / "config.yaml"

    def test_nothing_found(self, tmp_path) -> None:
        assert discover_config_file(("config.yml", "config.yaml"), tmp_path) is None

    def test_defaults_to_working_directory(self, tmp_path) -> None:
        (tmp_path / "config.yml").write_text("", encoding="utf-8")
        found = discover_config_file(("config.yml",))
        assert found is not None
        assert found.resolve() == (tmp_path / "config.yml").resolve()
