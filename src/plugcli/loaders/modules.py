"""Import a single Python source file as a throwaway module."""

from __future__ import annotations

import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from plugcli.exceptions import LoadError


def module_name_for(path: Path, prefix: str = "plugcli_plugin") -> str:
    """Return a unique, importable module name for *path*."""
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    stem = "".join(ch if ch.isalnum() else "_" for ch in path.stem)
    return f"{prefix}_{stem}_{digest}"


def load_module_from_file(path: Path, *, module_name: str | None = None) -> ModuleType:
    """Execute *path* and return the resulting module.

    The module is registered in :data:`sys.modules` while it executes so
    dataclasses and relative lookups inside it behave normally. Exceptions
    raised by the module body propagate unchanged.

    Raises:
        LoadError: If no import spec can be built for *path*.
    """
    module_name = module_name or module_name_for(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise LoadError(f"Could not load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module
