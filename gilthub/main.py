"""High-level entrypoint for gilthub."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .cli import parse_args
from .config import load_config
from .errors import GilthubError
from .pipeline import PIPELINES
from .reporter import make_console, report
from .runner import CommandRunner


def setup_logger(log_file: str = "", level: str = "INFO", verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("gilthub")
    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.handlers.clear()
    logger.propagate = False
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    # stdout carries the progress and report lines
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.DEBUG if verbose else logging.WARNING)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger


def main(argv: Optional[List[str]] = None) -> int:
    inv = parse_args(argv)
    logger = setup_logger(verbose=inv.verbose)

    try:
        cfg = load_config(Path(inv.config_path).expanduser())
        logger = setup_logger(cfg.log_file, cfg.log_level, inv.verbose)
        logger.info(f"[START] {inv.mode.value} {inv.source} -> {inv.target}")

        console = make_console()
        result = PIPELINES[inv.mode](inv, cfg, CommandRunner(logger), console, logger)
    except GilthubError as exc:
        logger.critical(str(exc))
        return 1

    report(result, console)
    logger.info(f"[DONE] ok={result.ok} name={result.repo_name} elapsed={result.duration_sec:.2f}s")
    return 0


__all__ = ["main", "setup_logger"]
