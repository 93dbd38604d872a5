"""Tests for httpbutler.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from httpbutler.config import (
    _atomic_write,
    get_config_dir,
    load_env_overrides,
    load_project_config,
    load_user_config,
    resolve_config,
    save_config,
)
from httpbutler.exceptions import ConfigError
from httpbutler.models import ResolverConfig


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


class TestConfigDir:
    def test_xdg_custom(self, isolated_config: Path) -> None:
        result = get_config_dir()
        assert result == isolated_config / "config" / "httpbutler"
        assert result.is_dir()

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("httpbutler.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".config" / "httpbutler"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("httpbutler.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".httpbutler"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "file.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "one")
        _atomic_write(target, "two")
        assert target.read_text(encoding="utf-8") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Loading layers
# ---------------------------------------------------------------------------


class TestLoadLayers:
    def test_user_config_missing_is_empty(self, isolated_config: Path) -> None:
        assert load_user_config() == {}

    def test_reading_does_not_create_config_dir(self, isolated_config: Path) -> None:
        resolve_config()
        assert not (isolated_config / "config" / "httpbutler").exists()

    def test_user_config_invalid_json(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "httpbutler" / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid user config"):
            load_user_config()

    def test_project_config_must_be_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "httpbutler.json", [1, 2])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()

    def test_project_config_explicit_dir(self, tmp_path: Path) -> None:
        _write_json(tmp_path / "httpbutler.json", {"strict_templates": True})
        assert load_project_config(tmp_path) == {"strict_templates": True}

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("true", True), ("YES", True), ("on", True),
         ("0", False), ("false", False), ("No", False), ("off", False)],
    )
    def test_env_booleans(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
    ) -> None:
        monkeypatch.setenv("HTTPBUTLER_STRICT_TEMPLATES", raw)
        assert load_env_overrides() == {"strict_templates": expected}

    def test_env_invalid_boolean(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTPBUTLER_APPEND_UNCONSUMED", "maybe")
        with pytest.raises(ConfigError, match="HTTPBUTLER_APPEND_UNCONSUMED"):
            load_env_overrides()

    def test_env_blank_ignored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTPBUTLER_LOWERCASE_BOOLEANS", "  ")
        assert load_env_overrides() == {}


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == ResolverConfig()

    def test_user_config_applied(self, isolated_config: Path) -> None:
        save_config(ResolverConfig(append_unconsumed=False))
        assert resolve_config().append_unconsumed is False

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        save_config(ResolverConfig(strict_templates=False))
        _write_json(isolated_config / "httpbutler.json", {"strict_templates": True})
        assert resolve_config().strict_templates is True

    def test_env_overrides_project(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_json(isolated_config / "httpbutler.json", {"strict_templates": True})
        monkeypatch.setenv("HTTPBUTLER_STRICT_TEMPLATES", "false")
        assert resolve_config().strict_templates is False

    def test_explicit_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTPBUTLER_STRICT_TEMPLATES", "false")
        assert resolve_config(overrides={"strict_templates": True}).strict_templates is True

    def test_none_overrides_ignored(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "httpbutler.json", {"strict_templates": True})
        assert resolve_config(overrides={"strict_templates": None}).strict_templates is True

    def test_unknown_key_rejected(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "httpbutler.json", {"strict_template": True})
        with pytest.raises(ConfigError, match="Invalid resolver configuration"):
            resolve_config()


class TestSaveConfig:
    def test_round_trip(self, isolated_config: Path) -> None:
        path = save_config(ResolverConfig(lowercase_booleans=False))
        assert path == isolated_config / "config" / "httpbutler" / "config.json"
        assert json.loads(path.read_text(encoding="utf-8")) == {
            "strict_templates": False,
            "append_unconsumed": True,
            "lowercase_booleans": False,
        }
        assert load_user_config()["lowercase_booleans"] is False
