"""Semantic version values used as tag names.

A :class:`Version` is the exact tag string (``v1.2.3``, ``v1.2.3-rc.1``,
``v0.0.0-20190101123456-abcdef123456``). Identity is the string itself, so
``v1.0.0`` and ``v1.0.0+meta`` are different versions even though they have
the same precedence.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from modstage.core.exceptions import InvalidVersionError

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    r"^v(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_PSEUDO_RE = re.compile(r"^v0\.0\.0-(\d{14})-([0-9a-f]{12})$")

PSEUDO_TIME_FORMAT = "%Y%m%d%H%M%S"
PSEUDO_REVISION_LENGTH = 12

VersionLike = Union["Version", str]


@dataclass(frozen=True)
class Version:
    """Validated semantic version tag."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _SEMVER_RE.match(self.value):
            raise InvalidVersionError(
                f"invalid semantic version: {self.value!r}",
                context={"version": str(self.value)},
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: VersionLike) -> "Version":
        """Return ``text`` as a Version, raising InvalidVersionError if malformed."""
        if isinstance(text, Version):
            return text
        return cls(str(text).strip())

    @staticmethod
    def is_valid(text: str) -> bool:
        return bool(_SEMVER_RE.match(text or ""))

    @classmethod
    def pseudo(cls, commit_time: datetime, commit_hash: str) -> "Version":
        """Build a pseudo-version naming an untagged commit.

        Example:
            >>> Version.pseudo(datetime(2019, 1, 1, 12, 34, 56, tzinfo=timezone.utc), "abcdef1234567890")
            Version(value='v0.0.0-20190101123456-abcdef123456')
        """
        if commit_time.tzinfo is not None:
            commit_time = commit_time.astimezone(timezone.utc)
        revision = commit_hash.lower()[:PSEUDO_REVISION_LENGTH]
        return cls(f"v0.0.0-{commit_time.strftime(PSEUDO_TIME_FORMAT)}-{revision}")

    @property
    def is_pseudo(self) -> bool:
        return _PSEUDO_RE.match(self.value) is not None

    @property
    def pseudo_revision(self) -> Optional[str]:
        """Abbreviated commit hash embedded in a pseudo-version, else None."""
        m = _PSEUDO_RE.match(self.value)
        return m.group(2) if m else None

    @property
    def prerelease(self) -> Optional[str]:
        return _SEMVER_RE.match(self.value).group(4)  # type: ignore[union-attr]

    @property
    def build(self) -> Optional[str]:
        return _SEMVER_RE.match(self.value).group(5)  # type: ignore[union-attr]

    def sort_key(self) -> Tuple:
        """Semantic-version precedence key (build metadata ignored)."""
        m = _SEMVER_RE.match(self.value)
        major, minor, patch = (int(m.group(i)) for i in (1, 2, 3))  # type: ignore[union-attr]
        pre = m.group(4)  # type: ignore[union-attr]
        if pre is None:
            return (major, minor, patch, 1, ())
        idents = tuple(
            (0, int(p), "") if p.isdigit() else (1, 0, p) for p in pre.split(".")
        )
        return (major, minor, patch, 0, idents)


def version_exists(versions: Iterable[Version], version: Version) -> bool:
    return any(v == version for v in versions)


def sort_versions(versions: Sequence[Version]) -> List[Version]:
    """Return ``versions`` ordered by semantic-version precedence."""
    return sorted(versions, key=Version.sort_key)


__all__ = [
    "Version",
    "VersionLike",
    "version_exists",
    "sort_versions",
    "PSEUDO_REVISION_LENGTH",
]
