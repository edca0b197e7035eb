"""Remote module client backed by the ``git`` executable.

Version listing queries the remote directly (``git ls-remote``) so it always
reflects what is published. Everything that needs objects (timestamps,
archives, short-reference resolution) goes through a bare mirror kept under
the client's directory. It is fetched lazily on first use and re-fetched when
a requested tag or reference is missing from it.
"""
from __future__ import annotations

import base64
import io
import logging
import subprocess
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Sequence

from modstage.core.config.domains.vcs import VcsConfig
from modstage.core.exceptions import (
    NoMatchingVersionError,
    ReferenceResolutionError,
    RemoteUnavailableError,
    UnknownVersionError,
    VcsError,
)
from modstage.core.utils.subprocess import run_git_command

from .version import Version

logger = logging.getLogger(__name__)

_TAG_REF_PREFIX = "refs/tags/"


@dataclass(frozen=True)
class Auth:
    """HTTP basic credentials for the remote (token hosts accept any username)."""

    username: str
    password: str = field(repr=False)

    def git_env(self) -> Dict[str, str]:
        """Environment passing the credentials as an ``http.extraHeader``.

        Using ``GIT_CONFIG_*`` keeps the secret out of argv and out of logs.
        """
        raw = f"{self.username}:{self.password}".encode("utf-8")
        token = base64.b64encode(raw).decode("ascii")
        return {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": f"Authorization: Basic {token}",
        }


def _stderr_tail(result: subprocess.CompletedProcess) -> str:
    err = result.stderr
    if isinstance(err, bytes):
        err = err.decode("utf-8", errors="replace")
    lines = (err or "").strip().splitlines()
    return lines[-1] if lines else ""


def parse_ls_remote_tags(stdout: str) -> List[Version]:
    """Parse ``git ls-remote --tags --refs`` output into semantic versions.

    Tags that are not semantic versions are skipped. Order follows git's
    output.
    """
    versions: List[Version] = []
    for raw in stdout.splitlines():
        parts = raw.strip().split("\t", 1)
        if len(parts) != 2 or not parts[1].startswith(_TAG_REF_PREFIX):
            continue
        name = parts[1][len(_TAG_REF_PREFIX) :]
        if Version.is_valid(name):
            versions.append(Version(name))
        else:
            logger.debug("Skipping non-semver tag %s", name)
    return versions


class GitVCS:
    """Read-only git client for one module."""

    def __init__(
        self,
        directory: Path | str,
        module: str,
        auth: Optional[Auth] = None,
        *,
        remote_url: Optional[str] = None,
        config: Optional[VcsConfig] = None,
    ) -> None:
        self.directory = Path(directory)
        self.module = module
        self.auth = auth
        self.config = config if config is not None else VcsConfig()
        self.remote_url = remote_url or f"{self.config.default_scheme}://{module}"
        self.mirror_dir = self.directory / self.config.mirror_dirname
        self._fetched = False
        self._fetch_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"GitVCS(module={self.module!r}, remote_url={self.remote_url!r})"

    # ---------- plumbing ----------

    def _git(self, args: Sequence[str], *, mirror: bool = True, text: bool = True) -> subprocess.CompletedProcess:
        cmd: List[str] = [self.config.git_executable]
        if mirror:
            cmd += ["--git-dir", str(self.mirror_dir)]
        cmd += list(args)
        return run_git_command(
            cmd,
            env=self.auth.git_env() if self.auth is not None else None,
            timeout=self.config.git_operations_seconds,
            text=text,
        )

    def _ensure_mirror(self, *, refresh: bool = False) -> None:
        with self._fetch_lock:
            if self._fetched and not refresh:
                return
            if not (self.mirror_dir / "HEAD").exists():
                self.mirror_dir.mkdir(parents=True, exist_ok=True)
                result = self._git(["init", "--bare", "--quiet", str(self.mirror_dir)], mirror=False)
                if result.returncode != 0:
                    raise VcsError(
                        f"cannot initialise mirror for {self.module}: {_stderr_tail(result)}",
                        context={"module": self.module, "path": str(self.mirror_dir)},
                    )
            logger.info("Fetching %s from %s", self.module, self.remote_url)
            result = self._git(
                [
                    "fetch",
                    "--force",
                    "--prune",
                    "--quiet",
                    self.remote_url,
                    "+refs/heads/*:refs/heads/*",
                    "+refs/tags/*:refs/tags/*",
                ]
            )
            if result.returncode != 0:
                raise RemoteUnavailableError(
                    f"git fetch failed for {self.module}: {_stderr_tail(result)}",
                    context={"module": self.module, "remote": self.remote_url},
                )
            self._fetched = True

    def _rev_parse(self, rev: str) -> Optional[str]:
        result = self._git(["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"])
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def _resolve_commit(self, rev: str) -> Optional[str]:
        """Resolve ``rev`` in the mirror, re-fetching once if it is missing.

        ``list()`` reads the remote live, so a tag published after the first
        fetch must still be reachable here.
        """
        self._ensure_mirror()
        commit = self._rev_parse(rev)
        if commit is None:
            logger.debug("%s not in mirror of %s; re-fetching", rev, self.module)
            self._ensure_mirror(refresh=True)
            commit = self._rev_parse(rev)
        return commit

    def _commit_time(self, commit: str) -> datetime:
        result = self._git(["log", "-1", "--format=%ct", commit])
        if result.returncode != 0:
            raise VcsError(
                f"cannot read commit time of {commit} in {self.module}: {_stderr_tail(result)}",
                context={"module": self.module, "commit": commit},
            )
        return datetime.fromtimestamp(int(result.stdout.strip()), tz=timezone.utc)

    def _commit_for(self, version: Version) -> str:
        if version.is_pseudo:
            commit = self._resolve_commit(version.pseudo_revision or "")
        else:
            commit = self._resolve_commit(f"{_TAG_REF_PREFIX}{version}")
        if commit is None:
            raise UnknownVersionError(
                f"unknown version {version} for module {self.module}",
                context={"module": self.module, "version": str(version)},
            )
        return commit

    # ---------- VCS surface ----------

    def list(self) -> List[Version]:
        result = self._git(["ls-remote", "--tags", "--refs", self.remote_url], mirror=False)
        if result.returncode != 0:
            raise RemoteUnavailableError(
                f"git ls-remote failed for {self.module}: {_stderr_tail(result)}",
                context={"module": self.module, "remote": self.remote_url},
            )
        versions = parse_ls_remote_tags(result.stdout)
        if not versions:
            raise NoMatchingVersionError(
                f"no matching versions for module {self.module}",
                context={"module": self.module},
            )
        return versions

    def timestamp(self, version: Version) -> datetime:
        return self._commit_time(self._commit_for(version))

    def zip(self, version: Version) -> BinaryIO:
        return self.zip_as(version, f"{self.module}@{version}")

    def zip_as(self, version: Version, root_dir_name: str) -> BinaryIO:
        commit = self._commit_for(version)
        result = self._git(
            ["archive", "--format=zip", f"--prefix={root_dir_name}/", commit],
            text=False,
        )
        if result.returncode != 0:
            raise VcsError(
                f"git archive failed for {self.module}@{version}: {_stderr_tail(result)}",
                context={"module": self.module, "version": str(version)},
            )
        return io.BytesIO(result.stdout)

    def version_from_reference(self, short: str) -> Version:
        commit = None if short.startswith("-") else self._resolve_commit(short)
        if commit is None:
            raise ReferenceResolutionError(
                f"cannot resolve reference {short!r} for module {self.module}",
                context={"module": self.module, "reference": short},
            )
        return Version.pseudo(self._commit_time(commit), commit)


__all__ = ["Auth", "GitVCS", "parse_ls_remote_tags"]
