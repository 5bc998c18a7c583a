"""Filesystem and string predicates used by the runtime and the loaders."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def is_blank(value: Any) -> bool:
    """Return True for ``None`` or a string that is empty after stripping."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_directory(path: Optional[PathLike]) -> bool:
    """Return True if *path* names an existing directory."""
    if path is None or is_blank(str(path)):
        return False
    return Path(path).is_dir()


def subdirectories(
    path: PathLike,
    recursive: bool = False,
    matching: Optional[str] = None,
    include_hidden: bool = True,
) -> list[str]:
    """List the sub-directories of *path*.

    Args:
        path: The directory to list.
        recursive: Descend into nested directories as well.
        matching: Optional glob applied to each directory's *name*.
        include_hidden: Include directories whose name starts with ``.``.

    Returns:
        Absolute directory paths, sorted lexicographically so that the
        result does not depend on filesystem listing order. An empty list
        when *path* is not a directory.
    """
    if not is_directory(path):
        return []

    root = Path(path).resolve()
    candidates = root.rglob("*") if recursive else root.iterdir()

    found: list[str] = []
    for entry in candidates:
        if not entry.is_dir():
            continue
        if not include_hidden and entry.name.startswith("."):
            continue
        if matching and not fnmatch.fnmatchcase(entry.name, matching):
            continue
        found.append(str(entry))
    return sorted(found)
