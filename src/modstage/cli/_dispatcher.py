"""
Auto-discovery CLI dispatcher for modstage.

Adding a command = adding a module to ``modstage/cli/commands``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Sequence

from modstage import __version__
from modstage.core.exceptions import ModstageError


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        try:
            module = importlib.import_module(f"modstage.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modstage",
        description="Stage module versions as ephemeral tags over a git remote",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"modstage {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override logging.level from configuration",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    for name, info in discover_commands().items():
        sub = subparsers.add_parser(name, help=info["summary"], description=info["summary"])
        if info["register_args"] is not None:
            info["register_args"](sub)
        sub.set_defaults(_handler=info["main"])
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    from modstage.cli._utils import get_repo_root
    from modstage.core.config.domains.logging import LoggingConfig
    from modstage.core.stdlib_logging import configure_logging

    cfg = LoggingConfig(repo_root=get_repo_root(args))
    configure_logging(level=args.log_level or cfg.level, log_path=cfg.path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        _configure_logging(args)
    except ModstageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        return int(args._handler(args) or 0)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
        return 2  # parser.error exits; kept for type checkers
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
