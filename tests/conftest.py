"""Shared pytest fixtures for gilthub tests."""

from __future__ import annotations

import io
import logging
import os
import posixpath
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest
from rich.console import Console

from gilthub.config import ENV_PREFIX, Config
from gilthub.errors import ProcessLaunchError, Stage

# action names the pipelines pass to the runner, by the stage they belong to
STAGE_ACTIONS = {
    Stage.CLONE: "clone",
    Stage.COMPRESS: "compress",
    Stage.UPLOAD: "copy archive to s3",
    Stage.DOWNLOAD: "download",
    Stage.UNCOMPRESS: "un-compress",
    Stage.RESTORE: "restore repository",
}


class FakeRunner:
    """Records commands instead of running them.

    ``statuses`` maps an action name to the exit status it should report;
    ``missing`` lists actions whose executable "is not installed".
    """

    def __init__(self, statuses: Optional[Dict[str, int]] = None, missing: Optional[Set[str]] = None):
        self.statuses = statuses or {}
        self.missing = missing or set()
        self.calls: List[Tuple[List[str], str, Optional[Path]]] = []
        self.seen_dirs: List[Path] = []

    def _launch(self, argv: Sequence[str], action: str) -> None:
        if action in self.missing:
            raise ProcessLaunchError(action, argv, FileNotFoundError(2, "No such file or directory", argv[0]))

    def status(self, argv, action, cwd=None) -> int:
        self._launch(argv, action)
        self.calls.append((list(argv), action, Path(cwd) if cwd else None))
        if cwd:
            self.seen_dirs.append(Path(cwd))
        return self.statuses.get(action, 0)

    def output(self, argv, action) -> str:
        self._launch(argv, action)
        self.calls.append((list(argv), action, None))
        # behaves like basename(1)
        return posixpath.basename(argv[-1].rstrip("/")) + "\n"

    @property
    def actions(self) -> List[str]:
        return [action for _, action, _ in self.calls]

    def argv_for(self, action: str) -> List[str]:
        for argv, name, _ in self.calls:
            if name == action:
                return argv
        raise AssertionError(f"{action!r} was never run")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def cfg(scratch_root: Path) -> Config:
    return Config(temp_root=scratch_root)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("gilthub.tests")


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_buffer: io.StringIO) -> Console:
    return Console(file=console_buffer, soft_wrap=True, highlight=False, emoji=False)
