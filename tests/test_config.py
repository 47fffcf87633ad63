"""Tests for runway.config."""

from pathlib import Path

import pytest

from runway.config import (
    DEFAULT_CONFIG,
    create_default_config,
    get_config_path,
    load_config,
    load_settings,
    merge_config,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("RUNWAY_API_URL", raising=False)
    return tmp_path


class TestConfigPath:
    """Tests for get_config_path."""

    def test_respects_xdg(self, isolated_config: Path) -> None:
        """Should live under XDG_CONFIG_HOME."""
        assert get_config_path() == isolated_config / "runway" / "config.toml"


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_defaults_with_private_permissions(self) -> None:
        """Should write the defaults readable only by the owner."""
        create_default_config()

        path = get_config_path()
        assert load_config(path) == DEFAULT_CONFIG
        assert path.stat().st_mode & 0o777 == 0o600


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self) -> None:
        """Should fall back to defaults when there is no file."""
        assert load_settings() == DEFAULT_CONFIG

    def test_file_overrides_defaults(self) -> None:
        """Should merge file values over the defaults."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        save_config({"server": {"port": 8080}}, path)

        settings = load_settings()

        assert settings["server"]["port"] == 8080
        assert settings["server"]["host"] == "127.0.0.1"
        assert settings["chart"]["window"] == 12

    def test_env_overrides_api_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should take the API URL from RUNWAY_API_URL."""
        monkeypatch.setenv("RUNWAY_API_URL", "http://elsewhere:1234")

        assert load_settings()["client"]["api_url"] == "http://elsewhere:1234"

    def test_defaults_not_mutated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should not leak overrides into DEFAULT_CONFIG."""
        monkeypatch.setenv("RUNWAY_API_URL", "http://elsewhere:1234")
        load_settings()

        assert DEFAULT_CONFIG["client"]["api_url"] == "http://localhost:3001"


class TestMergeConfig:
    """Tests for merge_config."""

    def test_nested_merge(self) -> None:
        """Should merge nested tables key by key."""
        merged = merge_config({"a": {"x": 1, "y": 2}, "b": 3}, {"a": {"y": 5}, "c": 4})

        assert merged == {"a": {"x": 1, "y": 5}, "b": 3, "c": 4}


class TestLoadAndSaveConfig:
    """Tests for load_config and save_config."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Should read a missing file as an empty config."""
        assert load_config(tmp_path / "absent.toml") == {}

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        """Should create the config directory on first save."""
        path = tmp_path / "nested" / "runway" / "config.toml"

        save_config({"chart": {"window": 6}}, path)

        assert load_config(path) == {"chart": {"window": 6}}
        assert path.stat().st_mode & 0o777 == 0o600
