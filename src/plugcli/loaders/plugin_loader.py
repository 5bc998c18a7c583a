"""Load a plugin from a directory.

Expected layout::

    my-plugin/
    +-- my-plugin.config.yaml    optional; "defaults" plus free-form config
    +-- commands/
    |   +-- my-plugin.py         root command (named after the plugin)
    |   +-- build.py             "build"
    |   +-- build/
    |       +-- release.py       "build release"
    +-- extensions/
        +-- greeting_extension.py   installs context.greeting

Files starting with ``_`` are skipped, and everything is visited in sorted
order so loading is deterministic for a given directory snapshot.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from plugcli.config import load_plugin_config, split_defaults
from plugcli.loaders.command_loader import load_command_from_file, load_command_from_preload
from plugcli.loaders.extension_loader import load_extension_from_file
from plugcli.models import Command, Extension, Plugin, PluginOptions

logger = logging.getLogger(__name__)

COMMANDS_DIR = "commands"
EXTENSIONS_DIR = "extensions"


def _is_loadable(path: Path) -> bool:
    return path.is_file() and path.suffix == ".py" and not path.name.startswith("_")


def _load_command_tree(
    directory: Path, pattern: str, parent_path: Sequence[str] = ()
) -> list[Command]:
    """Load command modules in *directory*; sub-directories become sub-commands."""
    commands: list[Command] = []
    by_stem: dict[str, Command] = {}

    for file_path in sorted(directory.glob(pattern)):
        if not _is_loadable(file_path):
            continue
        command = load_command_from_file(file_path, parent_path)
        commands.append(command)
        by_stem.setdefault(file_path.stem, command)

    for sub in sorted(p for p in directory.iterdir() if p.is_dir()):
        if sub.name.startswith(("_", ".")):
            continue
        parent = by_stem.get(sub.name)
        implicit = parent is None
        if parent is None:
            parent = Command(name=sub.name, command_path=(*parent_path, sub.name))
        children = _load_command_tree(sub, pattern, parent.command_path)
        if implicit and not children:
            continue
        parent.commands.extend(children)
        if implicit:
            commands.append(parent)

    return commands


def _load_extensions(directory: Path, pattern: str) -> list[Extension]:
    return [
        load_extension_from_file(file_path)
        for file_path in sorted(directory.glob(pattern))
        if _is_loadable(file_path)
    ]


def load_plugin_from_directory(
    directory: str | Path,
    *,
    brand: Optional[str] = None,
    options: Optional[PluginOptions] = None,
) -> Plugin:
    """Load the plugin rooted at *directory*.

    Args:
        directory: Absolute path of the plugin directory.
        brand: The runtime's brand, used for logging only.
        options: Loader options; ``name`` overrides the directory name,
            ``preloaded_commands`` are placed ahead of the disk commands.

    Returns:
        The loaded :class:`~plugcli.models.Plugin`. Errors raised while
        importing command or extension modules propagate unchanged.
    """
    options = options or PluginOptions()
    root = Path(directory)
    name = options.name or root.name

    defaults, config = split_defaults(load_plugin_config(name, root))

    commands: list[Command] = [
        load_command_from_preload(descriptor) for descriptor in options.preloaded_commands
    ]
    commands_dir = root / COMMANDS_DIR
    if commands_dir.is_dir():
        commands.extend(_load_command_tree(commands_dir, options.command_file_pattern))

    for command in commands:
        if command.name == name:
            command.root = True

    extensions: list[Extension] = []
    extensions_dir = root / EXTENSIONS_DIR
    if extensions_dir.is_dir():
        extensions = _load_extensions(extensions_dir, options.extension_file_pattern)

    plugin = Plugin(
        name=name,
        directory=str(root),
        hidden=options.hidden,
        commands=commands,
        extensions=extensions,
        defaults=defaults,
        config=config,
        options=options,
    )
    logger.debug(
        "Loaded plugin '%s' for %s: %d commands, %d extensions",
        name,
        brand or "<unbranded>",
        len(commands),
        len(extensions),
    )
    return plugin
