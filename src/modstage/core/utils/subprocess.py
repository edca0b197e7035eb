"""Subprocess helpers with config-driven timeouts.

- No shell=True
- Output is always captured
- Timeouts come from ``vcs.git_operations_seconds`` unless given explicitly
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from time import perf_counter
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


def _to_cwd(cwd: Optional[Path | str]) -> Optional[str]:
    """Convert Path or str cwd to str for subprocess."""
    if cwd is None:
        return None
    return str(cwd)


def configured_git_timeout(cwd: Optional[Path | str] = None) -> float:
    """Return the configured git timeout in seconds."""
    # Lazy import to avoid circular dependency with the config package
    from modstage.core.config.domains.vcs import VcsConfig

    return VcsConfig(repo_root=Path(cwd) if cwd else None).git_operations_seconds


def run_git_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command with captured output.

    Args:
        cmd: Full command, starting with the git executable
        cwd: Working directory (Path or str)
        env: Extra environment variables layered over ``os.environ``
        timeout: Timeout in seconds (defaults to vcs.git_operations_seconds)
        text: Decode output as text; pass False for binary payloads

    Returns:
        CompletedProcess from subprocess.run

    Raises:
        subprocess.TimeoutExpired: When the command exceeds its timeout.
    """
    if timeout is None:
        timeout = configured_git_timeout(cwd)

    full_env = dict(os.environ)
    full_env.update(env or {})
    # Never prompt for credentials.
    full_env.setdefault("GIT_TERMINAL_PROMPT", "0")

    start = perf_counter()
    result = subprocess.run(
        list(cmd),
        cwd=_to_cwd(cwd),
        env=full_env,
        capture_output=True,
        text=text,
        timeout=timeout,
    )
    logger.debug(
        "%s exited %s in %.1fms",
        " ".join(cmd[:3]),
        result.returncode,
        (perf_counter() - start) * 1000.0,
    )
    return result


__all__ = ["configured_git_timeout", "run_git_command"]
