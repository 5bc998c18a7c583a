"""``context.meta`` -- information about the running application."""

from __future__ import annotations

from typing import Any, Optional

from plugcli import __version__


def command_info(runtime: Any) -> list[list[str]]:
    """Rows of ``[command, aliases, description, plugin]`` for help output.

    Hidden plugins and hidden commands are left out. Commands are listed
    depth-first per plugin, default plugin first.
    """
    if runtime is None:
        return []
    rows: list[list[str]] = []
    for plugin in runtime.visible_plugins():
        for command in plugin.iter_commands():
            if command.hidden:
                continue
            rows.append(
                [
                    " ".join(command.command_path) or command.name,
                    ", ".join(command.aliases),
                    command.description,
                    plugin.name,
                ]
            )
    return rows


class Meta:
    def __init__(self, context: Any) -> None:
        self._context = context

    @property
    def brand(self) -> Optional[str]:
        runtime = self._context.runtime
        return runtime.brand if runtime is not None else None

    @property
    def version(self) -> str:
        return __version__

    def command_info(self) -> list[list[str]]:
        return command_info(self._context.runtime)

    def plugins(self) -> list[str]:
        runtime = self._context.runtime
        return [plugin.name for plugin in runtime.visible_plugins()] if runtime else []


def setup(context: Any) -> None:
    context.meta = Meta(context)
