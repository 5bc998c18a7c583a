"""Load extensions from Python modules.

An extension module defines ``setup(context)`` and optionally ``NAME``.
Without ``NAME`` the file stem is used with a trailing ``_extension``
removed, so ``extensions/greeting_extension.py`` installs
``context.greeting``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from plugcli.exceptions import LoadError
from plugcli.loaders.modules import load_module_from_file
from plugcli.models import Extension

logger = logging.getLogger(__name__)

_SUFFIX = "_extension"


def extension_name_for(path: Path) -> str:
    stem = path.stem
    if stem.endswith(_SUFFIX) and len(stem) > len(_SUFFIX):
        stem = stem[: -len(_SUFFIX)]
    return stem


def load_extension_from_file(path: str | Path) -> Extension:
    """Load one extension module.

    Args:
        path: Path to the extension's ``.py`` file.

    Returns:
        The :class:`~plugcli.models.Extension` described by the module.

    Raises:
        LoadError: If the file is missing or does not define a callable
            ``setup``.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise LoadError(f"Extension file not found: {file_path}")

    module = load_module_from_file(file_path)
    setup = getattr(module, "setup", None)
    if not callable(setup):
        raise LoadError(f"Extension module {file_path} must define setup(context)")

    name = getattr(module, "NAME", None) or extension_name_for(file_path)
    logger.debug("Loaded extension '%s' from %s", name, file_path)
    return Extension(name=name, setup=setup, file=str(file_path))
