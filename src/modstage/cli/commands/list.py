"""
modstage list command.

SUMMARY: List remote and staged versions of a module

Remote versions come first in the order the remote reports them, followed
by staged versions that are not published yet.
"""

from __future__ import annotations

import argparse

from modstage.cli import OutputFormatter, add_module_args, build_overlay
from modstage.core.exceptions import ModstageError
from modstage.core.vcs import sort_versions

SUMMARY = "List remote and staged versions of a module"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_module_args(parser)
    parser.add_argument(
        "--sorted",
        action="store_true",
        help="Order by semantic-version precedence instead of remote order",
    )


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        vcs = build_overlay(args)
        versions = vcs.list()
    except ModstageError as exc:
        formatter.error(exc)
        return 1

    if args.sorted:
        versions = sort_versions(versions)
    names = [str(v) for v in versions]
    formatter.success({"module": args.module, "versions": names}, "\n".join(names))
    return 0
