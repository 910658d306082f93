"""Command-line argument parsing for gilthub."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

DESCRIPTION = """\
Archive/restore a git repository to/from an AWS S3 bucket.

  Archiving: Please make sure to create the S3 bucket first.
  Restoring: Please make sure to create the empty remote git repository first.
"""

EPILOG = """\
Example:
  gilthub archive git@github.com:gilt/scala-1-day.git github-repo-archive
  gilthub restore s3://github-repo-archive/scala-1-day.tar.gz git@github.com:grahamar/scala-1-day.git
"""

PROFILE_HELP = (
    "The AWS profile to use, if you have multiple profiles, you can use this option "
    "to specify the named profile to use."
)


class Mode(Enum):
    ARCHIVE = "archive"
    RESTORE = "restore"

    @property
    def past(self) -> str:
        return "archived" if self is Mode.ARCHIVE else "restored"

    @property
    def gerund(self) -> str:
        return "archiving" if self is Mode.ARCHIVE else "restoring"


@dataclass(frozen=True)
class Invocation:
    """A parsed command line.

    ``source`` and ``target`` depend on the mode: clone URL and bucket URL when
    archiving, bucket archive URL and git repository URL when restoring.
    """

    mode: Mode
    profile: str
    source: str
    target: str
    config_path: str = "gilthub.yaml"
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gilthub",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, default="gilthub.yaml", help="Path to configuration file (optional)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each step to stderr")

    sub = parser.add_subparsers(dest="command", metavar="{archive,restore}")
    sub.required = True

    archive = sub.add_parser("archive", help="Bare-clone a repository and upload it as <name>.tar.gz")
    archive.add_argument("-p", "--profile", type=str, default="", metavar="PROFILE", help=PROFILE_HELP)
    archive.add_argument("git_clone_url", metavar="<git-clone-url>")
    archive.add_argument("bucket_url", metavar="<bucket-url>")

    restore = sub.add_parser("restore", help="Download an archive and mirror-push it to a repository")
    restore.add_argument("-p", "--profile", type=str, default="", metavar="PROFILE", help=PROFILE_HELP)
    restore.add_argument("bucket_archive_url", metavar="<bucket-archive-url>")
    restore.add_argument("git_repo_url", metavar="<git-repo-url>")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> Invocation:
    args = build_parser().parse_args(argv)
    mode = Mode(args.command)
    if mode is Mode.ARCHIVE:
        source, target = args.git_clone_url, args.bucket_url
    else:
        source, target = args.bucket_archive_url, args.git_repo_url
    return Invocation(
        mode=mode,
        profile=args.profile,
        source=source,
        target=target,
        config_path=args.config,
        verbose=args.verbose,
    )


__all__ = ["Mode", "Invocation", "build_parser", "parse_args"]
