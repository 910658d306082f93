"""Scoped scratch directories."""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import Config
from .errors import WorkspaceError


@contextmanager
def scratch_dir(cfg: Config, logger: logging.Logger) -> Iterator[Path]:
    """Yield a fresh temporary directory that is removed when the block exits."""
    try:
        tmp = tempfile.TemporaryDirectory(prefix=cfg.temp_prefix, dir=cfg.temp_root)
    except OSError as exc:
        raise WorkspaceError(f"failed to create temp dir: {exc}") from exc
    path = Path(tmp.name)
    logger.debug(f"[TEMP] created {path}")
    try:
        yield path
    finally:
        tmp.cleanup()
        logger.debug(f"[TEMP] removed {path}")


__all__ = ["scratch_dir"]
