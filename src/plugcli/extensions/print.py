"""``context.print`` -- the active :class:`~plugcli.output.OutputManager` plus help output."""

from __future__ import annotations

from typing import Any, Optional

from plugcli.extensions.meta import command_info
from plugcli.output import OutputManager, get_output

HELP_HEADERS = ["Command", "Aliases", "Description", "Plugin"]


class PrintToolbox:
    """Thin wrapper giving commands the output methods they need."""

    def __init__(self, context: Any, output: OutputManager) -> None:
        self._context = context
        self.output = output

    def info(self, message: str) -> None:
        self.output.info(message)

    def success(self, message: str) -> None:
        self.output.success(message)

    def warning(self, message: str) -> None:
        self.output.warning(message)

    def error(self, message: str) -> None:
        self.output.error(message)

    def suggest(self, message: str) -> None:
        self.output.suggest(message)

    def debug(self, message: str) -> None:
        self.output.debug(message)

    def data(self, data: Any) -> None:
        self.output.format_data(data)

    def table(self, headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
        self.output.print_table(headers, rows, title)

    def print_commands(self, err: bool = False) -> None:
        """List every visible command, default plugin first."""
        runtime = self._context.runtime
        title = f"{runtime.brand} commands" if runtime and runtime.brand else "Commands"
        self.output.print_table(HELP_HEADERS, command_info(runtime), title=title, err=err)


def setup(context: Any) -> None:
    context.print = PrintToolbox(context, get_output())
