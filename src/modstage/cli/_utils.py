"""Shared helpers turning parsed CLI arguments into domain objects."""
from __future__ import annotations

import argparse
import os
import re
from pathlib import Path
from typing import Optional, Tuple

from modstage.core.config.domains.vcs import VcsConfig
from modstage.core.exceptions import ConfigError
from modstage.core.vcs import Auth, EphemeralTagStorage, TaggableVCS, Version, new_git_with_ephemeral_tags

_UNSAFE_DIR_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def get_repo_root(args: argparse.Namespace) -> Path:
    raw = getattr(args, "repo_root", None)
    return Path(raw).expanduser().resolve() if raw else Path.cwd()


def parse_tag_spec(tag_spec: str) -> Tuple[Version, str]:
    """Parse ``VERSION=REF`` into its parts.

    Raises:
        argparse.ArgumentTypeError: When the value is not ``VERSION=REF``.
        InvalidVersionError: When VERSION is not a semantic version.
    """
    version, sep, ref = tag_spec.partition("=")
    if not sep or not version.strip() or not ref.strip():
        raise argparse.ArgumentTypeError(f"expected VERSION=REF, got {tag_spec!r}")
    return Version.parse(version.strip()), ref.strip()


def _default_directory(repo_root: Path, module: str) -> Path:
    return repo_root / ".modstage" / "cache" / _UNSAFE_DIR_CHARS.sub("_", module)


def _auth_from_args(args: argparse.Namespace) -> Optional[Auth]:
    username = getattr(args, "username", None)
    password_env = getattr(args, "password_env", None)
    if not username and not password_env:
        return None
    password = ""
    if password_env:
        if password_env not in os.environ:
            raise ConfigError(
                f"environment variable {password_env} is not set",
                context={"variable": password_env},
            )
        password = os.environ[password_env]
    return Auth(username or "git", password)


def build_overlay(
    args: argparse.Namespace,
    storage: Optional[EphemeralTagStorage] = None,
) -> TaggableVCS:
    """Build the module overlay and stage every ``--tag`` on it."""
    repo_root = get_repo_root(args)
    directory = Path(args.directory) if getattr(args, "directory", None) else _default_directory(repo_root, args.module)
    vcs = new_git_with_ephemeral_tags(
        directory,
        args.module,
        _auth_from_args(args),
        storage if storage is not None else EphemeralTagStorage(),
        remote_url=getattr(args, "remote_url", None),
        config=VcsConfig(repo_root=repo_root),
    )
    for tag_spec in getattr(args, "tags", None) or []:
        version, ref = parse_tag_spec(tag_spec)
        vcs.tag(version, ref)
    return vcs


__all__ = ["build_overlay", "get_repo_root", "parse_tag_spec"]
