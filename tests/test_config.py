"""Tests for settings resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from filterflow.config import DEFAULT_STORE_PATH, load_settings
from filterflow.errors import ConfigError
from filterflow.normalize.schema import Source

ENV_VARS = (
    "FILTERFLOW_CONFIG",
    "FILTERFLOW_STORE",
    "FILTERFLOW_EXPORT_DIR",
    "FILTERFLOW_LOG_LEVEL",
    "FILTERFLOW_TIMEOUT",
    "VTOOLS_TOKEN",
    "SOUK_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.store_path == DEFAULT_STORE_PATH
    assert settings.export_dir == "."
    assert settings.log_level == "INFO"
    assert settings.request_timeout == 30
    assert settings.headers_for(Source.VTOOLS) == {}
    assert settings.headers_for(None) == {}


def test_yaml_values(tmp_path: Path) -> None:
    config = tmp_path / "filterflow.yaml"
    config.write_text(
        "store_path: store/batch.json\n"
        "export_dir: exports\n"
        "log_level: debug\n"
        "request_timeout: 5\n"
        "headers:\n"
        "  souk:\n"
        "    X-Api-Key: abc\n"
        "  ebay:\n"
        "    X-Api-Key: ignored\n",
        encoding="utf-8",
    )
    settings = load_settings(str(config))
    assert settings.store_path == Path("store/batch.json")
    assert settings.export_dir == "exports"
    assert settings.log_level == "DEBUG"
    assert settings.request_timeout == 5
    assert settings.headers_for(Source.SOUK) == {"X-Api-Key": "abc"}
    assert Source.VTOOLS not in settings.headers


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "filterflow.yaml"
    config.write_text("export_dir: exports\nrequest_timeout: 5\n", encoding="utf-8")
    monkeypatch.setenv("FILTERFLOW_CONFIG", str(config))
    monkeypatch.setenv("FILTERFLOW_EXPORT_DIR", "elsewhere")
    monkeypatch.setenv("FILTERFLOW_TIMEOUT", "12")
    monkeypatch.setenv("VTOOLS_TOKEN", "secret")
    settings = load_settings()
    assert settings.export_dir == "elsewhere"
    assert settings.request_timeout == 12
    assert settings.headers_for(Source.VTOOLS) == {"Authorization": "Bearer secret"}


def test_invalid_files(tmp_path: Path) -> None:
    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(not_mapping))
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "missing.yaml"))
    bad_timeout = tmp_path / "timeout.yaml"
    bad_timeout.write_text("request_timeout: soon\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(bad_timeout))
