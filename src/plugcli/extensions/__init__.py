"""Core extensions registered by every :class:`~plugcli.runtime.runtime.Runtime`.

Each module exposes ``setup(context)`` and installs one attribute on the
context. They are registered in :data:`CORE_EXTENSIONS` order, before any
plugin, so a plugin extension with the same name replaces the core one.
"""

from __future__ import annotations

from typing import Any, Callable

from plugcli.extensions import (
    filesystem,
    http,
    meta,
    patching,
    print as print_,
    prompt,
    semver,
    strings,
    system,
    template,
)

CORE_EXTENSIONS: list[tuple[str, Callable[[Any], Any]]] = [
    ("meta", meta.setup),
    ("strings", strings.setup),
    ("print", print_.setup),
    ("template", template.setup),
    ("filesystem", filesystem.setup),
    ("semver", semver.setup),
    ("system", system.setup),
    ("http", http.setup),
    ("prompt", prompt.setup),
    ("patching", patching.setup),
]

__all__ = ["CORE_EXTENSIONS"]
