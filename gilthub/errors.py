"""Error types and the stage failure taxonomy."""

from __future__ import annotations

from enum import Enum


class Stage(Enum):
    """Pipeline stages, each carrying the message reported when it fails."""

    CLONE = "Unable to clone repository."
    COMPRESS = "Unable to compress repository."
    UPLOAD = "Unable to upload archived repository to S3."
    DOWNLOAD = "Unable to download archived repository."
    UNCOMPRESS = "Unable to un-compress repository."
    RESTORE = "Unable to restore repository."

    @property
    def message(self) -> str:
        return self.value


ARCHIVE_STAGES = (Stage.CLONE, Stage.COMPRESS, Stage.UPLOAD)
RESTORE_STAGES = (Stage.DOWNLOAD, Stage.UNCOMPRESS, Stage.RESTORE)


class GilthubError(Exception):
    """Unrecoverable failure; aborts the run without a report line."""


class ConfigError(GilthubError):
    pass


class WorkspaceError(GilthubError):
    pass


class ProcessLaunchError(GilthubError):
    """A child process could not be started at all."""

    def __init__(self, action: str, argv, cause: OSError):
        self.action = action
        self.argv = list(argv)
        self.cause = cause
        super().__init__(f"failed to {action}: {cause}")


__all__ = [
    "Stage",
    "ARCHIVE_STAGES",
    "RESTORE_STAGES",
    "GilthubError",
    "ConfigError",
    "WorkspaceError",
    "ProcessLaunchError",
]
