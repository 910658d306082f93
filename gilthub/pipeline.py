"""Archive and restore pipelines.

Each pipeline is a fixed chain of blocking external commands. The first
command that exits non-zero ends the run with that stage's failure; commands
after it are never started. Processes that cannot be spawned at all raise
``ProcessLaunchError`` out of the pipeline instead.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .cli import Invocation, Mode
from .config import Config
from .errors import Stage
from .naming import archive_filename, clean_archive_name, clean_restore_name, resolve_profile, upload_url
from .runner import CommandRunner
from .workspace import scratch_dir


@dataclass
class PipelineResult:
    mode: Mode
    ok: bool
    repo_name: Optional[str] = None
    failed_stage: Optional[Stage] = None
    duration_sec: float = 0.0

    @property
    def error(self) -> Optional[str]:
        return self.failed_stage.message if self.failed_stage else None


def _failed(mode: Mode, stage: Stage, repo_name: Optional[str], started: float, logger: logging.Logger) -> PipelineResult:
    logger.info(f"[FAIL] {stage.name.lower()}: {stage.message}")
    return PipelineResult(mode=mode, ok=False, repo_name=repo_name, failed_stage=stage,
                          duration_sec=time.time() - started)


def run_archive(inv: Invocation, cfg: Config, runner: CommandRunner, console: Console,
                logger: logging.Logger) -> PipelineResult:
    started = time.time()
    profile = resolve_profile(inv.profile)

    with scratch_dir(cfg, logger) as clone_dir, scratch_dir(cfg, logger) as compress_dir:
        console.print(f"[green]Cloning [blue]{escape(inv.source)}[/blue] to [blue]{escape(str(clone_dir))}[/blue][/green]")
        logger.info(f"[CLONE] {inv.source} -> {clone_dir}")
        status = runner.status([cfg.git_bin, "clone", "--bare", inv.source, str(clone_dir)], "clone")
        if status != 0:
            return _failed(inv.mode, Stage.CLONE, None, started, logger)

        repo_name = clean_archive_name(runner.output([cfg.basename_bin, inv.source], "derive repository name"))
        archive_path = compress_dir / archive_filename(repo_name)

        logger.info(f"[COMPRESS] {clone_dir} -> {archive_path}")
        status = runner.status([cfg.tar_bin, "-zcf", str(archive_path), "."], "compress", cwd=clone_dir)
        if status != 0:
            return _failed(inv.mode, Stage.COMPRESS, repo_name, started, logger)

        destination = upload_url(inv.target, repo_name)
        console.print(f"[blue]Uploading {escape(archive_filename(repo_name))} to S3[/blue]")
        logger.info(f"[UPLOAD] {archive_path} -> {destination} (profile={profile})")
        status = runner.status(
            [cfg.aws_bin, "s3", "cp", str(archive_path), destination, "--profile", profile],
            "copy archive to s3",
        )
        if status != 0:
            return _failed(inv.mode, Stage.UPLOAD, repo_name, started, logger)

    return PipelineResult(mode=inv.mode, ok=True, repo_name=repo_name, duration_sec=time.time() - started)


def run_restore(inv: Invocation, cfg: Config, runner: CommandRunner, console: Console,
                logger: logging.Logger) -> PipelineResult:
    started = time.time()
    profile = resolve_profile(inv.profile)

    with scratch_dir(cfg, logger) as extract_dir:
        console.print(f"[green]Downloading [blue]{escape(inv.source)}[/blue] to [blue]{escape(str(extract_dir))}[/blue][/green]")
        logger.info(f"[DOWNLOAD] {inv.source} -> {extract_dir} (profile={profile})")
        status = runner.status(
            [cfg.aws_bin, "s3", "cp", inv.source, str(extract_dir), "--profile", profile],
            "download",
        )
        if status != 0:
            return _failed(inv.mode, Stage.DOWNLOAD, None, started, logger)

        repo_name = clean_restore_name(runner.output([cfg.basename_bin, inv.source], "derive repository name"))

        logger.info(f"[UNCOMPRESS] {extract_dir / repo_name}")
        status = runner.status([cfg.tar_bin, "-zxf", str(extract_dir / repo_name)], "un-compress", cwd=extract_dir)
        if status != 0:
            return _failed(inv.mode, Stage.UNCOMPRESS, repo_name, started, logger)

        console.print(f"[blue]Restoring {escape(repo_name)} to {escape(inv.target)}[/blue]")
        logger.info(f"[RESTORE] {repo_name} -> {inv.target}")
        status = runner.status([cfg.git_bin, "push", "--mirror", inv.target], "restore repository", cwd=extract_dir)
        if status != 0:
            return _failed(inv.mode, Stage.RESTORE, repo_name, started, logger)

    return PipelineResult(mode=inv.mode, ok=True, repo_name=repo_name, duration_sec=time.time() - started)


PIPELINES = {
    Mode.ARCHIVE: run_archive,
    Mode.RESTORE: run_restore,
}


__all__ = ["PipelineResult", "run_archive", "run_restore", "PIPELINES"]
