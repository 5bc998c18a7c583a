"""Shared test fixtures for plugcli.

Provides factories that write real plugin directories (command and
extension modules, config files) under ``tmp_path``, an isolated
configuration environment, and output-state management. These fixtures
are automatically discovered by pytest and available to all test modules
without explicit imports.
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from plugcli.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When CliRunner or capsys swap those streams the cached
    references go stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration lookups to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME below tmp_path, forces the XDG
    code path, clears PLUGCLI_* variables and changes the working directory
    to a fresh ``cwd`` folder so project rc files never leak in.

    Returns:
        The working directory used for the test.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setattr("plugcli.config._is_xdg_platform", lambda: True)
    for var in ["PLUGCLI_BRAND", "PLUGCLI_SRC", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)

    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


# ---------------------------------------------------------------------------
# Plugin directory factory
# ---------------------------------------------------------------------------


def command_source(result: Any = None, **attrs: Any) -> str:
    """Source for a command module whose ``run`` returns *result*.

    Extra keyword arguments become upper-case module attributes, e.g.
    ``command_source("hi", aliases=("h",))`` emits ``ALIASES = ('h',)``.
    """
    lines = [f"{key.upper()} = {value!r}" for key, value in attrs.items()]
    lines += ["", "", "def run(context):", f"    return {result!r}", ""]
    return "\n".join(lines)


def extension_source(attribute: str, value: Any, name: Optional[str] = None) -> str:
    """Source for an extension module that sets ``context.<attribute> = value``."""
    header = f"NAME = {name!r}\n\n\n" if name else ""
    return header + textwrap.dedent(
        f"""\
        def setup(context):
            setattr(context, {attribute!r}, {value!r})
        """
    )


PluginFactory = Callable[..., Path]


@pytest.fixture(name="command_source")
def command_source_fixture() -> Callable[..., str]:
    """Expose :func:`command_source` to tests."""
    return command_source


@pytest.fixture(name="extension_source")
def extension_source_fixture() -> Callable[..., str]:
    """Expose :func:`extension_source` to tests."""
    return extension_source


@pytest.fixture
def make_plugin(tmp_path: Path) -> PluginFactory:
    """Factory writing a plugin directory and returning its path.

    Usage::

        root = make_plugin(
            "movie",
            commands={"quote.py": command_source("q"), "quote/random.py": ...},
            extensions={"imdb_extension.py": extension_source("imdb", 1)},
            config={"defaults": {"count": 3}},
        )
    """

    def _make(
        name: str,
        commands: Optional[dict[str, str]] = None,
        extensions: Optional[dict[str, str]] = None,
        config: Optional[dict[str, Any]] = None,
        config_name: Optional[str] = None,
        parent: Optional[Path] = None,
        files: Optional[dict[str, str]] = None,
    ) -> Path:
        root = (parent or tmp_path / "plugins") / name
        root.mkdir(parents=True, exist_ok=True)
        for relative, source in (commands or {}).items():
            path = root / "commands" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        for relative, source in (extensions or {}).items():
            path = root / "extensions" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        for relative, content in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        if config is not None:
            path = root / f"{config_name or name}.config.json"
            path.write_text(json.dumps(config), encoding="utf-8")
        return root

    return _make


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
