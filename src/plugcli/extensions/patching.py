"""``context.patching`` -- in-place edits of text files.

Every mutating helper returns ``False`` when the file is missing or the
edit would not change it, ``True`` otherwise.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Pattern, Union

Needle = Union[str, Pattern[str]]


def _read(path: str | Path) -> str | None:
    file_path = Path(path)
    if not file_path.is_file():
        return None
    return file_path.read_text(encoding="utf-8")


class PatchingToolbox:
    def exists(self, path: str | Path, needle: Needle) -> bool:
        content = _read(path)
        if content is None:
            return False
        if isinstance(needle, str):
            return needle in content
        return needle.search(content) is not None

    def replace(self, path: str | Path, old: str, new: str) -> bool:
        content = _read(path)
        if content is None or old not in content:
            return False
        Path(path).write_text(content.replace(old, new), encoding="utf-8")
        return True

    def prepend(self, path: str | Path, text: str) -> bool:
        content = _read(path)
        if content is None or content.startswith(text):
            return False
        Path(path).write_text(text + content, encoding="utf-8")
        return True

    def append(self, path: str | Path, text: str) -> bool:
        content = _read(path)
        if content is None or content.endswith(text):
            return False
        Path(path).write_text(content + text, encoding="utf-8")
        return True

    def insert_after(self, path: str | Path, needle: Needle, text: str) -> bool:
        content = _read(path)
        if content is None:
            return False
        pattern = re.compile(re.escape(needle)) if isinstance(needle, str) else needle
        match = pattern.search(content)
        if match is None or content[match.end():].startswith(text):
            return False
        Path(path).write_text(
            content[: match.end()] + text + content[match.end():], encoding="utf-8"
        )
        return True


def setup(context: Any) -> None:
    context.patching = PatchingToolbox()
