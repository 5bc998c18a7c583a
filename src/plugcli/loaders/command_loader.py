"""Build :class:`~plugcli.models.Command` objects from descriptors and modules.

Two sources are supported:

* **Preloaded descriptors** -- mappings such as
  ``{"name": "hello", "alias": "h", "run": fn}`` handed to
  ``Runtime.add_command`` or listed in ``preloaded_commands``. They are
  validated against :class:`~plugcli.models.CommandDescriptor`.
* **Command modules** -- ``.py`` files under a plugin's ``commands/``
  directory. A module either exposes ``COMMAND`` (a descriptor mapping) or a
  module-level ``run(context)`` together with optional ``NAME``,
  ``ALIASES``, ``DESCRIPTION``, ``HIDDEN`` and ``ROOT`` attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from pydantic import ValidationError

from plugcli.exceptions import ConfigurationError, LoadError
from plugcli.loaders.modules import load_module_from_file
from plugcli.models import Command, CommandDescriptor

logger = logging.getLogger(__name__)


def _with_path(command: Command, parent_path: Sequence[str]) -> Command:
    """Stamp ``command_path`` on *command* and its descendants."""
    command.command_path = (*parent_path, command.name)
    for child in command.commands:
        _with_path(child, command.command_path)
    return command


def _copy_tree(command: Command, parent_path: Sequence[str]) -> Command:
    """Return a copy of *command* and its descendants with fresh paths.

    The caller's objects are never stamped, so one ready-made command can
    be preloaded into several plugins.
    """
    path = (*parent_path, command.name)
    return replace(
        command,
        command_path=path,
        commands=[_copy_tree(child, path) for child in command.commands],
    )


def load_command_from_preload(
    descriptor: Any, parent_path: Sequence[str] = ()
) -> Command:
    """Normalise a raw command descriptor into a :class:`Command`.

    Args:
        descriptor: A :class:`Command` (copied along with its
            sub-commands), a mapping, or a
            :class:`~plugcli.models.CommandDescriptor`.
        parent_path: Names of the enclosing commands.

    Raises:
        ConfigurationError: If the descriptor is not a mapping or fails
            validation. The message names the command when possible.
    """
    if isinstance(descriptor, Command):
        return _copy_tree(descriptor, parent_path)

    if isinstance(descriptor, CommandDescriptor):
        parsed = descriptor
    elif isinstance(descriptor, Mapping):
        try:
            parsed = CommandDescriptor.model_validate(dict(descriptor))
        except ValidationError as exc:
            name = descriptor.get("name", "<unnamed>")
            raise ConfigurationError(f"Invalid command '{name}': {exc}") from exc
    else:
        raise ConfigurationError(
            f"Can't load command from {type(descriptor).__name__}; "
            "expected a mapping or Command"
        )

    command = Command(
        name=parsed.name,
        aliases=parsed.all_aliases(),
        description=parsed.description,
        hidden=parsed.hidden,
        root=parsed.root,
        run=parsed.run,
    )
    command.command_path = (*parent_path, command.name)
    command.commands = [
        load_command_from_preload(child, command.command_path)
        for child in parsed.commands
    ]
    return command


def _docstring_summary(doc: str | None) -> str:
    if not doc:
        return ""
    for line in doc.strip().splitlines():
        if line.strip():
            return line.strip()
    return ""


def load_command_from_file(
    path: str | Path, parent_path: Sequence[str] = ()
) -> Command:
    """Load one command module.

    Args:
        path: Path to the command's ``.py`` file.
        parent_path: Names of the enclosing commands, derived from the
            directory the file lives in.

    Raises:
        LoadError: If the file is missing or defines neither ``COMMAND``
            nor a callable ``run``.
        ConfigurationError: If ``COMMAND`` is malformed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise LoadError(f"Command file not found: {file_path}")

    module = load_module_from_file(file_path)

    descriptor = getattr(module, "COMMAND", None)
    if descriptor is not None:
        if isinstance(descriptor, Mapping):
            descriptor = {"name": file_path.stem, **descriptor}
        command = load_command_from_preload(descriptor, parent_path)
    else:
        run = getattr(module, "run", None)
        if not callable(run):
            raise LoadError(
                f"Command module {file_path} must define COMMAND or run(context)"
            )
        aliases = getattr(module, "ALIASES", ())
        if isinstance(aliases, str):
            aliases = (aliases,)
        command = Command(
            name=getattr(module, "NAME", None) or file_path.stem,
            aliases=tuple(aliases),
            description=getattr(module, "DESCRIPTION", None)
            or _docstring_summary(module.__doc__),
            hidden=bool(getattr(module, "HIDDEN", False)),
            root=bool(getattr(module, "ROOT", False)),
            run=run,
        )
        _with_path(command, parent_path)

    command.file = str(file_path)
    logger.debug("Loaded command '%s' from %s", " ".join(command.command_path), file_path)
    return command
