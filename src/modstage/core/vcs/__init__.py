"""Version control clients for modstage.

- version: semantic version values and pseudo-versions
- base: protocols for remote clients and the exposed VCS surface
- git: git-executable backed remote client
- tags: ephemeral tag storage and the tag overlay
"""
from __future__ import annotations

from .base import RemoteVCS, Taggable, VCS
from .git import Auth, GitVCS
from .tags import (
    EphemeralTag,
    EphemeralTagStorage,
    TaggableVCS,
    new_git_with_ephemeral_tags,
)
from .version import Version, sort_versions, version_exists

__all__ = [
    # base
    "VCS",
    "Taggable",
    "RemoteVCS",
    # git
    "Auth",
    "GitVCS",
    # tags
    "EphemeralTag",
    "EphemeralTagStorage",
    "TaggableVCS",
    "new_git_with_ephemeral_tags",
    # version
    "Version",
    "sort_versions",
    "version_exists",
]
