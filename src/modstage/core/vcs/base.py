"""Protocols describing the VCS surfaces modstage consumes and exposes."""
from __future__ import annotations

from datetime import datetime
from typing import BinaryIO, List, Protocol, runtime_checkable

from .version import Version


@runtime_checkable
class VCS(Protocol):
    """Read surface for one module's version history."""

    def list(self) -> List[Version]:
        """Return the module's versions.

        Raises:
            NoMatchingVersionError: The module has no published versions.
        """
        ...

    def timestamp(self, version: Version) -> datetime: ...

    def zip(self, version: Version) -> BinaryIO: ...


@runtime_checkable
class Taggable(Protocol):
    def tag(self, version: Version, short: str) -> None: ...


@runtime_checkable
class RemoteVCS(VCS, Protocol):
    """A VCS client that can also name archive roots and resolve short refs."""

    def zip_as(self, version: Version, root_dir_name: str) -> BinaryIO:
        """Archive ``version`` with every entry under ``root_dir_name/``."""
        ...

    def version_from_reference(self, short: str) -> Version:
        """Turn a short commit reference into a retrievable version.

        Raises:
            ReferenceResolutionError: The reference does not name a commit.
        """
        ...


__all__ = ["VCS", "Taggable", "RemoteVCS"]
