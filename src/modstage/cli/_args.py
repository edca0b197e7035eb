"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root (where .modstage/config is read from)."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root used for configuration",
    )


def add_module_args(parser: argparse.ArgumentParser) -> None:
    """Add the arguments needed to build a module overlay.

    Args:
        parser: ArgumentParser to add the arguments to
    """
    parser.add_argument(
        "--module",
        required=True,
        help="Module path (e.g., example.com/foo)",
    )
    parser.add_argument(
        "--dir",
        dest="directory",
        help="Working directory for the local mirror (default: <repo-root>/.modstage/cache/<module>)",
    )
    parser.add_argument(
        "--remote-url",
        help="Remote repository URL (default: derived from the module path)",
    )
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        metavar="VERSION=REF",
        help="Stage an ephemeral tag before running the command (repeatable)",
    )
    parser.add_argument(
        "--username",
        help="Username for HTTP authentication",
    )
    parser.add_argument(
        "--password-env",
        metavar="NAME",
        help="Environment variable holding the HTTP password or token",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)
