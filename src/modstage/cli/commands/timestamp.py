"""
modstage timestamp command.

SUMMARY: Show the commit time of a module version
"""

from __future__ import annotations

import argparse

from modstage.cli import OutputFormatter, add_module_args, build_overlay
from modstage.core.exceptions import ModstageError

SUMMARY = "Show the commit time of a module version"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("version", help="Version to look up (e.g., v1.2.3)")
    add_module_args(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        vcs = build_overlay(args)
        when = vcs.timestamp(args.version)
    except ModstageError as exc:
        formatter.error(exc)
        return 1

    iso = when.isoformat()
    formatter.success({"module": args.module, "version": args.version, "timestamp": iso}, iso)
    return 0
