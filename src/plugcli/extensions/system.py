"""``context.system`` -- run external programs."""

from __future__ import annotations

import shlex
import shutil
import subprocess
from typing import Any, Optional, Sequence


class SystemToolbox:
    def run(
        self,
        command: str | Sequence[str],
        trim: bool = False,
        cwd: Optional[str] = None,
    ) -> str:
        """Run *command* and return its stdout.

        Raises:
            subprocess.CalledProcessError: If the command exits non-zero.
        """
        args = shlex.split(command) if isinstance(command, str) else list(command)
        completed = subprocess.run(
            args, capture_output=True, text=True, check=True, cwd=cwd
        )
        return completed.stdout.strip() if trim else completed.stdout

    def which(self, program: str) -> Optional[str]:
        return shutil.which(program)


def setup(context: Any) -> None:
    context.system = SystemToolbox()
