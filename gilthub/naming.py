"""Repository name, profile and object URL derivation."""

from __future__ import annotations

from typing import Optional

DEFAULT_PROFILE = "default"
ARCHIVE_SUFFIX = ".tar.gz"
S3_SCHEME = "s3://"


def resolve_profile(profile: Optional[str]) -> str:
    if not profile:
        return DEFAULT_PROFILE
    return profile


def clean_archive_name(basename_output: str) -> str:
    """Turn ``basename`` output for a clone URL into a repository name.

    ``" widget.git\\n"`` becomes ``"widget"``. Only one trailing ``.git`` is
    removed, so ``my.git.io.git`` keeps its inner ``.git``.
    """
    name = basename_output.strip()
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name.strip()


def clean_restore_name(basename_output: str) -> str:
    # the archive suffix stays: the name doubles as the downloaded file name
    return basename_output.strip()


def archive_filename(repo_name: str) -> str:
    return f"{repo_name}{ARCHIVE_SUFFIX}"


def upload_url(bucket_url: str, repo_name: str) -> str:
    """Destination object for an archive, e.g. ``s3://bucket/prefix/widget.tar.gz``."""
    bucket = bucket_url.strip()
    if bucket.startswith(S3_SCHEME):
        bucket = bucket[len(S3_SCHEME):]
    bucket = bucket.rstrip("/")
    return f"{S3_SCHEME}{bucket}/{archive_filename(repo_name)}"


__all__ = [
    "DEFAULT_PROFILE",
    "ARCHIVE_SUFFIX",
    "resolve_profile",
    "clean_archive_name",
    "clean_restore_name",
    "archive_filename",
    "upload_url",
]
