"""Unit tests for settings loader and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from reqbuilder.exceptions import ReqBuilderConfigError
from reqbuilder.settings import AppSettings, load_settings, validate_settings


def test_defaults() -> None:
    s = AppSettings()
    assert s.timeout_seconds == 30.0
    assert s.http2 is True
    assert s.follow_redirects is True
    assert s.verify_ssl is True
    assert s.export_filename == "api-config.json"


def test_load_settings_file_not_found() -> None:
    with pytest.raises(ReqBuilderConfigError, match="Settings file not found"):
        load_settings("/nonexistent/settings.yaml")


def test_load_settings_valid(settings_path: Path) -> None:
    s = load_settings(settings_path)
    assert s.timeout_seconds == 5
    assert s.http2 is False
    assert s.follow_redirects is False
    assert s.verify_ssl is True
    assert s.export_filename == "request.json"


def test_load_settings_empty_file_gives_defaults(tmp_path: Path) -> None:
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_settings(p) == AppSettings()


def test_load_settings_invalid_yaml(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("not: valid: yaml: [")
    with pytest.raises(ReqBuilderConfigError, match="Invalid YAML syntax"):
        load_settings(bad)


def test_load_settings_not_mapping(tmp_path: Path) -> None:
    bad = tmp_path / "list.yaml"
    bad.write_text("- a\n- b\n")
    with pytest.raises(ReqBuilderConfigError, match="must be a YAML object"):
        load_settings(bad)


def test_load_settings_timeout_zero(tmp_path: Path) -> None:
    bad = tmp_path / "zero.yaml"
    bad.write_text("timeout_seconds: 0\n")
    with pytest.raises(ReqBuilderConfigError, match="timeout_seconds must be > 0"):
        load_settings(bad)


def test_load_settings_non_bool_flag(tmp_path: Path) -> None:
    bad = tmp_path / "flag.yaml"
    bad.write_text("http2: maybe\n")
    with pytest.raises(ReqBuilderConfigError, match="Invalid settings value"):
        load_settings(bad)


def test_validate_settings_empty_export_name() -> None:
    with pytest.raises(ReqBuilderConfigError, match="export_filename"):
        validate_settings(AppSettings(export_filename="  "))


def test_load_settings_log_level(tmp_path: Path) -> None:
    p = tmp_path / "log.yaml"
    p.write_text("log_level: debug\n")
    assert load_settings(p).log_level == "debug"
    assert AppSettings().log_level is None


def test_load_settings_unknown_log_level(tmp_path: Path) -> None:
    bad = tmp_path / "log.yaml"
    bad.write_text("log_level: loud\n")
    with pytest.raises(ReqBuilderConfigError, match="log_level: Unknown log level"):
        load_settings(bad)
