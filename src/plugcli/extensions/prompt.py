"""``context.prompt`` -- interactive questions via Typer."""

from __future__ import annotations

from typing import Any, Optional

import typer


class PromptToolbox:
    def confirm(self, message: str, default: bool = False) -> bool:
        return typer.confirm(message, default=default)

    def ask(self, message: str, default: Optional[str] = None, hide_input: bool = False) -> str:
        return typer.prompt(message, default=default, hide_input=hide_input)


def setup(context: Any) -> None:
    context.prompt = PromptToolbox()
