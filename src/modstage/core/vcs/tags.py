"""Ephemeral tags: locally staged versions layered over a remote VCS.

An ephemeral tag maps a semantic version to a short commit reference for one
module. Tags live only in an :class:`EphemeralTagStorage` for the lifetime of
the process. :class:`TaggableVCS` blends them into the remote client's
version list and redirects reads of a staged version to its commit.

Remote versions always win: a version that exists remotely cannot be staged,
and once a staged version is published upstream it is listed exactly once.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Dict, List, Optional

from modstage.core.exceptions import NoMatchingVersionError, VersionAlreadyPublishedError

from .base import RemoteVCS
from .version import Version, VersionLike, version_exists

if TYPE_CHECKING:
    from modstage.core.config.domains.vcs import VcsConfig

    from .git import Auth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EphemeralTag:
    version: Version
    short: str


class EphemeralTagStorage:
    """Process-local ephemeral tags, keyed by module path.

    Construct one per session and share it with every module's
    :class:`TaggableVCS`. Each module's tag list is guarded by its own lock,
    so different modules never contend.
    """

    def __init__(self) -> None:
        self._tags_by_module: Dict[str, List[EphemeralTag]] = {}
        self._module_locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, module: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._module_locks.get(module)
            if lock is None:
                lock = threading.Lock()
                self._module_locks[module] = lock
            return lock

    def tag(self, module: str, version: Version, short: str) -> None:
        """Record ``version -> short`` for ``module``, replacing any prior entry."""
        with self._lock_for(module):
            tags = [t for t in self._tags_by_module.get(module, []) if t.version != version]
            tags.append(EphemeralTag(version, short))
            # The module map is only mutated under the guard.
            with self._locks_guard:
                self._tags_by_module[module] = tags

    def tags(self, module: str) -> List[EphemeralTag]:
        """Snapshot of ``module``'s tags in insertion order (empty if unknown)."""
        with self._lock_for(module):
            return list(self._tags_by_module.get(module, []))

    def modules(self) -> List[str]:
        with self._locks_guard:
            return [m for m, tags in self._tags_by_module.items() if tags]

    def __contains__(self, module: object) -> bool:
        if not isinstance(module, str):
            return False
        with self._locks_guard:
            return bool(self._tags_by_module.get(module))

    def __len__(self) -> int:
        with self._locks_guard:
            return sum(len(tags) for tags in self._tags_by_module.values())


def append_ephemeral_versions(versions: List[Version], tags: List[EphemeralTag]) -> List[Version]:
    """Return ``versions`` followed by each tagged version not already in it."""
    ephemeral = [t.version for t in tags if not version_exists(versions, t.version)]
    return [*versions, *ephemeral]


class TaggableVCS:
    """VCS view of one module that adds ephemeral tags to a remote client."""

    def __init__(self, wrapped: RemoteVCS, module: str, storage: EphemeralTagStorage) -> None:
        self.wrapped = wrapped
        self.module = module
        self.storage = storage

    def __repr__(self) -> str:
        return f"TaggableVCS(module={self.module!r}, wrapped={self.wrapped!r})"

    def _safe_list(self) -> List[Version]:
        try:
            return list(self.wrapped.list())
        except NoMatchingVersionError as exc:
            # Ephemeral tags can still provide versions.
            logger.info("No remote version tags yet for %s: %s", self.module, exc)
            return []

    def tag(self, version: VersionLike, short: str) -> None:
        """Stage ``version`` at commit ``short`` for this module.

        Re-staging a version that is not yet published replaces its reference.

        Raises:
            VersionAlreadyPublishedError: ``version`` already exists remotely.
            InvalidVersionError: ``version`` is not a semantic version.
        """
        version = Version.parse(version)
        remote_versions = self._safe_list()
        if version_exists(remote_versions, version):
            raise VersionAlreadyPublishedError(self.module, version)
        self.storage.tag(self.module, version, short)
        logger.debug("Staged %s@%s at %s", self.module, version, short)

    def list(self) -> List[Version]:
        """Remote versions in remote order, then staged versions not yet published."""
        remote_versions = self._safe_list()
        # Remote versions win.
        return append_ephemeral_versions(remote_versions, self.storage.tags(self.module))

    def timestamp(self, version: VersionLike) -> datetime:
        resolved = self.resolve_version(version)
        return self.wrapped.timestamp(resolved)

    def zip(self, version: VersionLike) -> BinaryIO:
        """Archive ``version``, rooted at ``<module>@<version>`` even when staged."""
        version = Version.parse(version)
        resolved = self.resolve_version(version)
        return self.wrapped.zip_as(resolved, f"{self.module}@{version}")

    def resolve_version(self, version: VersionLike) -> Version:
        """Map a staged version to its commit; other versions are returned as-is."""
        version = Version.parse(version)
        for tag in self.storage.tags(self.module):
            if tag.version == version:
                return self.wrapped.version_from_reference(tag.short)
        return version


def new_git_with_ephemeral_tags(
    directory: Path | str,
    module: str,
    auth: Optional["Auth"],
    storage: EphemeralTagStorage,
    *,
    remote_url: Optional[str] = None,
    config: Optional["VcsConfig"] = None,
) -> TaggableVCS:
    """Return a git-backed VCS client for ``module`` with ephemeral tag support."""
    from .git import GitVCS

    git = GitVCS(directory, module, auth, remote_url=remote_url, config=config)
    return TaggableVCS(git, module, storage)


__all__ = [
    "EphemeralTag",
    "EphemeralTagStorage",
    "TaggableVCS",
    "append_ephemeral_versions",
    "new_git_with_ephemeral_tags",
]
