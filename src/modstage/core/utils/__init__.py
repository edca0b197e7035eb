"""Shared helpers for modstage core (merging, subprocess wrappers)."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .subprocess import run_git_command

__all__ = ["deep_merge", "merge_arrays", "run_git_command"]
