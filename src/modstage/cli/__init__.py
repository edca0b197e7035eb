"""
modstage CLI package.

Commands live in ``commands/`` and are discovered automatically. Each
command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Overlay construction from parsed arguments
"""
from ._output import OutputFormatter
from ._args import add_json_flag, add_module_args, add_repo_root_flag
from ._utils import build_overlay, get_repo_root, parse_tag_spec

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_module_args",
    "add_repo_root_flag",
    # Utilities
    "build_overlay",
    "get_repo_root",
    "parse_tag_spec",
]
