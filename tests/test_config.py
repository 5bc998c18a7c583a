"""Tests for plugcli.config -- XDG paths, file parsing, layered precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from plugcli.config import (
    get_config_dir,
    get_data_dir,
    load_config,
    load_plugin_config,
    project_config_path,
    read_config_file,
    split_defaults,
)
from plugcli.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> Path:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def _write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_uses_xdg_config_home(self, tmp_path: Path) -> None:
        assert get_config_dir("movie") == tmp_path / "xdg-config" / "movie"

    def test_config_dir_not_created_by_default(self, tmp_path: Path) -> None:
        assert not get_config_dir("movie").exists()
        assert get_config_dir("movie", create=True).is_dir()

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir("movie") == tmp_path / ".config" / "movie"

    def test_data_dir_created(self, tmp_path: Path) -> None:
        result = get_data_dir("movie")
        assert result == tmp_path / "xdg-data" / "movie"
        assert result.is_dir()

    def test_fallback_on_non_xdg_platform(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("plugcli.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir("movie") == tmp_path / ".movie"
        assert get_data_dir("movie") == tmp_path / ".movie"


# ---------------------------------------------------------------------------
# File parsing
# ---------------------------------------------------------------------------


class TestReadConfigFile:
    def test_json(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "a.json", {"x": 1})
        assert read_config_file(path) == {"x": 1}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml(self, tmp_path: Path, suffix: str) -> None:
        path = _write_text(tmp_path / f"a{suffix}", "defaults:\n  count: 3\nname: movie\n")
        assert read_config_file(path) == {"defaults": {"count": 3}, "name": "movie"}

    def test_rc_file_json(self, tmp_path: Path) -> None:
        path = _write_text(tmp_path / ".movierc", '{"x": 1}')
        assert read_config_file(path) == {"x": 1}

    def test_rc_file_yaml(self, tmp_path: Path) -> None:
        path = _write_text(tmp_path / ".movierc", "x: 1\n")
        assert read_config_file(path) == {"x": 1}

    def test_empty_file(self, tmp_path: Path) -> None:
        assert read_config_file(_write_text(tmp_path / "a.yaml", "   \n")) == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = _write_text(tmp_path / "a.json", "{broken")
        with pytest.raises(ConfigError, match="a.json"):
            read_config_file(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = _write_text(tmp_path / "a.yaml", "key: [unclosed\n")
        with pytest.raises(ConfigError):
            read_config_file(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "a.json", [1, 2])
        with pytest.raises(ConfigError, match="expected a mapping"):
            read_config_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            read_config_file(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Layered lookup
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_blank_name(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) is None
        assert load_config("  ", tmp_path) is None

    def test_no_files(self, tmp_path: Path) -> None:
        assert load_config("movie", tmp_path) is None

    def test_plugin_file_only(self, tmp_path: Path) -> None:
        _write_json(tmp_path / "movie.config.json", {"defaults": {"n": 1}})
        assert load_config("movie", tmp_path) == {"defaults": {"n": 1}}

    def test_plugin_yaml_file(self, tmp_path: Path) -> None:
        _write_text(tmp_path / "movie.config.yaml", "color: red\n")
        assert load_config("movie", tmp_path) == {"color": "red"}

    def test_precedence(self, tmp_path: Path, isolated_config: Path) -> None:
        _write_json(tmp_path / "movie.config.json", {"a": "plugin", "b": "plugin", "c": "plugin"})
        _write_json(get_config_dir("movie") / "config.json", {"b": "user", "c": "user"})
        _write_json(isolated_config / ".movierc.json", {"c": "project"})

        assert load_config("movie", tmp_path) == {"a": "plugin", "b": "user", "c": "project"}

    def test_defaults_merged_key_by_key(self, tmp_path: Path, isolated_config: Path) -> None:
        _write_json(tmp_path / "movie.config.json", {"defaults": {"a": 1, "b": 1}})
        _write_text(isolated_config / ".movierc", "defaults:\n  b: 2\n")

        assert load_config("movie", tmp_path) == {"defaults": {"a": 1, "b": 2}}

    def test_user_and_project_without_directory(self, isolated_config: Path) -> None:
        _write_text(get_config_dir("movie") / "config.yml", "x: 1\n")
        assert load_config("movie") == {"x": 1}

    def test_malformed_layer_raises(self, tmp_path: Path, isolated_config: Path) -> None:
        _write_text(isolated_config / ".movierc.json", "{nope")
        with pytest.raises(ConfigError):
            load_config("movie", tmp_path)

    def test_project_rc_lookup_order(self, tmp_path: Path) -> None:
        _write_text(tmp_path / ".movierc.yaml", "x: 1\n")
        assert project_config_path("movie", tmp_path) == tmp_path / ".movierc.yaml"
        _write_text(tmp_path / ".movierc", "x: 2\n")
        assert project_config_path("movie", tmp_path) == tmp_path / ".movierc"

    def test_load_plugin_config_ignores_other_layers(
        self, tmp_path: Path, isolated_config: Path
    ) -> None:
        _write_json(tmp_path / "p.config.json", {"x": 1})
        _write_json(isolated_config / ".prc", {"x": 2})
        assert load_plugin_config("p", tmp_path) == {"x": 1}


class TestSplitDefaults:
    def test_split(self) -> None:
        assert split_defaults({"defaults": {"n": 1}, "k": "v"}) == ({"n": 1}, {"k": "v"})

    def test_none(self) -> None:
        assert split_defaults(None) == ({}, {})

    def test_non_mapping_defaults_dropped(self) -> None:
        assert split_defaults({"defaults": 3, "k": 1}) == ({}, {"k": 1})

    def test_input_not_mutated(self) -> None:
        config = {"defaults": {"n": 1}}
        split_defaults(config)
        assert config == {"defaults": {"n": 1}}
