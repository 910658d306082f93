"""Child process execution for the archive and restore pipelines."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from .errors import ProcessLaunchError

PathLike = Union[str, Path]


class CommandRunner:
    """Runs external commands one at a time, blocking until each exits.

    ``action`` names what the command does ("clone", "compress", ...) and is
    only used in the diagnostic raised when the process cannot be spawned.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def status(self, argv: Sequence[str], action: str, cwd: Optional[PathLike] = None) -> int:
        self.logger.debug(f"[EXEC] {' '.join(argv)} (cwd={cwd or '.'})")
        try:
            completed = subprocess.run(list(argv), cwd=str(cwd) if cwd else None, check=False)
        except OSError as exc:
            raise ProcessLaunchError(action, argv, exc) from exc
        self.logger.debug(f"[EXEC] exit={completed.returncode}")
        return completed.returncode

    def output(self, argv: Sequence[str], action: str) -> str:
        self.logger.debug(f"[EXEC] {' '.join(argv)} (capture)")
        try:
            completed = subprocess.run(list(argv), stdout=subprocess.PIPE, check=False)
        except OSError as exc:
            raise ProcessLaunchError(action, argv, exc) from exc
        return completed.stdout.decode("utf-8", errors="replace")


__all__ = ["CommandRunner"]
