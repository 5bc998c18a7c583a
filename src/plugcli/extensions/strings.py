"""``context.strings`` -- small string helpers for command bodies."""

from __future__ import annotations

import re
from types import SimpleNamespace
from typing import Any

from plugcli.filesystem import is_blank

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z]|\d|\b|_)|[A-Z]?[a-z]+|[A-Z]+|\d+")


def words(value: str) -> list[str]:
    """Split *value* into words across case changes, dashes and underscores."""
    return _WORD_RE.findall(value.replace("-", " ").replace("_", " "))


def camel_case(value: str) -> str:
    parts = [w.lower() for w in words(value)]
    return parts[0] + "".join(p.capitalize() for p in parts[1:]) if parts else ""


def pascal_case(value: str) -> str:
    return "".join(w.lower().capitalize() for w in words(value))


def kebab_case(value: str) -> str:
    return "-".join(w.lower() for w in words(value))


def snake_case(value: str) -> str:
    return "_".join(w.lower() for w in words(value))


def pluralize(value: str, count: int = 2) -> str:
    """Naive English plural; returns *value* unchanged when ``count == 1``."""
    if count == 1 or not value:
        return value
    if value.endswith(("s", "x", "z", "ch", "sh")):
        return value + "es"
    if value.endswith("y") and value[-2:-1] not in ("a", "e", "i", "o", "u"):
        return value[:-1] + "ies"
    return value + "s"


def trim(value: str) -> str:
    return value.strip()


def setup(context: Any) -> None:
    context.strings = SimpleNamespace(
        is_blank=is_blank,
        words=words,
        camel_case=camel_case,
        pascal_case=pascal_case,
        kebab_case=kebab_case,
        snake_case=snake_case,
        pluralize=pluralize,
        trim=trim,
    )
