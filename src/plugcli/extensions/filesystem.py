"""``context.filesystem`` -- pathlib-based file helpers."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Optional

from plugcli.filesystem import is_directory, subdirectories


class FilesystemToolbox:
    is_directory = staticmethod(is_directory)
    subdirectories = staticmethod(subdirectories)

    def cwd(self) -> str:
        return str(Path.cwd())

    def exists(self, path: str | Path) -> bool:
        return Path(path).exists()

    def read(self, path: str | Path) -> Optional[str]:
        """Return the file's text, or ``None`` if it does not exist."""
        file_path = Path(path)
        if not file_path.is_file():
            return None
        return file_path.read_text(encoding="utf-8")

    def write(self, path: str | Path, content: str) -> None:
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    def remove(self, path: str | Path) -> None:
        target = Path(path)
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()


def setup(context: Any) -> None:
    context.filesystem = FilesystemToolbox()
