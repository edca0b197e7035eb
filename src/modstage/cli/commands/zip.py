"""
modstage zip command.

SUMMARY: Write the source archive of a module version

The archive root is always ``<module>@<version>``, also for staged
versions whose content comes from the staged commit.
"""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path

from modstage.cli import OutputFormatter, add_module_args, build_overlay
from modstage.core.exceptions import ModstageError

SUMMARY = "Write the source archive of a module version"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("version", help="Version to archive (e.g., v1.2.3)")
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Destination .zip path",
    )
    add_module_args(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    output = Path(args.output)
    try:
        vcs = build_overlay(args)
        stream = vcs.zip(args.version)
    except ModstageError as exc:
        formatter.error(exc)
        return 1

    output.parent.mkdir(parents=True, exist_ok=True)
    with stream, output.open("wb") as fh:
        shutil.copyfileobj(stream, fh)

    formatter.success(
        {"module": args.module, "version": args.version, "path": str(output)},
        f"Wrote {output}",
    )
    return 0
