"""Configuration loading with XDG paths and layered precedence.

This module handles the on-disk configuration of a plugcli application:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.<brand>/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Layered configuration** -- :func:`load_config` merges, from lowest to
  highest precedence:

  1. the plugin's own file ``<directory>/<name>.config.{json,yaml,yml}``,
  2. the user file ``<config_dir>/config.{json,yaml,yml}``,
  3. the project rc file ``./.<name>rc`` (JSON or YAML),
     ``./.<name>rc.json``, ``./.<name>rc.yaml`` or ``./.<name>rc.yml``.

  Top-level keys from a higher layer replace lower ones, except the
  reserved ``defaults`` mapping which is merged key by key.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Optional

import yaml

from plugcli.exceptions import ConfigError
from plugcli.filesystem import is_blank

logger = logging.getLogger(__name__)

_APP_NAME = "plugcli"
_SUFFIXES = (".json", ".yaml", ".yml")

DEFAULTS_KEY = "defaults"
"""Reserved top-level key holding default values for commands and extensions."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir(app_name: str) -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{app_name}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir(app_name: str = _APP_NAME, create: bool = False) -> Path:
    """Return the configuration directory for *app_name*.

    On Linux/BSD: ``$XDG_CONFIG_HOME/<app_name>/`` (default ``~/.config/<app_name>/``).
    On macOS/Windows: ``~/.<app_name>/``.

    Args:
        app_name: Usually the runtime's brand.
        create: Create the directory if it does not exist.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / app_name
    else:
        path = _fallback_base_dir(app_name)
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir(app_name: str = _APP_NAME) -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/<app_name>/`` (default ``~/.local/share/<app_name>/``).
    On macOS/Windows: ``~/.<app_name>/``, shared with the config directory.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / app_name
    else:
        path = _fallback_base_dir(app_name)
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- File parsing ---


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a JSON or YAML configuration file into a dict.

    ``.json`` files are parsed as JSON, ``.yaml``/``.yml`` as YAML, and
    extension-less rc files are tried as JSON first, then YAML. An empty
    file yields an empty dict.

    Raises:
        ConfigError: If the file cannot be read or parsed, or if its top
            level is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    if not text.strip():
        return {}

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid config file at {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid config file at {path}: expected a mapping, got {type(data).__name__}"
        )
    return data


def _merge(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    """Overlay *layer* on *base*; ``defaults`` is merged one level deep."""
    merged = dict(base)
    for key, value in layer.items():
        if (
            key == DEFAULTS_KEY
            and isinstance(value, dict)
            and isinstance(merged.get(key), dict)
        ):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


# --- Layered lookup ---


def _first_existing(candidates: list[Path]) -> Optional[Path]:
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def plugin_config_path(name: str, directory: str | Path) -> Optional[Path]:
    """Return the plugin's own ``<name>.config.*`` file, if present."""
    base = Path(directory)
    return _first_existing([base / f"{name}.config{suffix}" for suffix in _SUFFIXES])


def user_config_path(name: str) -> Optional[Path]:
    """Return the user-level ``config.*`` file under the config dir, if present."""
    base = get_config_dir(name)
    return _first_existing([base / f"config{suffix}" for suffix in _SUFFIXES])


def project_config_path(name: str, cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the project ``.<name>rc`` file in *cwd*, if present."""
    base = cwd or Path.cwd()
    rc = f".{name}rc"
    return _first_existing(
        [base / rc] + [base / f"{rc}{suffix}" for suffix in _SUFFIXES]
    )


def load_plugin_config(name: str, directory: str | Path) -> Optional[dict[str, Any]]:
    """Load only the plugin-local configuration file for *name*."""
    if is_blank(name):
        return None
    path = plugin_config_path(name, directory)
    if path is None:
        return None
    return read_config_file(path)


def load_config(
    name: Optional[str], directory: Optional[str | Path] = None
) -> Optional[dict[str, Any]]:
    """Load and merge every configuration layer for *name*.

    Args:
        name: Configuration namespace, usually the runtime's brand.
        directory: The plugin directory holding ``<name>.config.*``.

    Returns:
        The merged configuration, or ``None`` when *name* is blank or no
        configuration file exists in any layer.

    Raises:
        ConfigError: If any existing file is malformed.
    """
    if is_blank(name):
        return None
    assert name is not None

    paths = [
        plugin_config_path(name, directory) if directory is not None else None,
        user_config_path(name),
        project_config_path(name),
    ]

    result: Optional[dict[str, Any]] = None
    for path in paths:
        if path is None:
            continue
        logger.debug("Reading config layer %s", path)
        result = _merge(result or {}, read_config_file(path))
    return result


def split_defaults(config: Optional[dict[str, Any]]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a loaded configuration into ``(defaults, config_without_defaults)``.

    A missing configuration is treated as an empty mapping; a missing or
    non-mapping ``defaults`` value becomes an empty dict.
    """
    data = dict(config or {})
    defaults = data.pop(DEFAULTS_KEY, None)
    if not isinstance(defaults, dict):
        defaults = {}
    return defaults, data
