from __future__ import annotations

from typing import Any, Dict, Mapping


class ModstageError(Exception):
    """Base exception for modstage."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class VcsError(ModstageError, RuntimeError):
    """Raised by a remote VCS client when an operation cannot be completed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModstageError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class RemoteUnavailableError(VcsError):
    """Raised when the remote repository cannot be queried or fetched."""


class NoMatchingVersionError(VcsError):
    """Raised when a module has no published version tags at all."""


class UnknownVersionError(VcsError):
    """Raised when a requested version does not map to any commit."""


class ReferenceResolutionError(VcsError):
    """Raised when a short commit reference cannot be resolved."""


class VersionAlreadyPublishedError(ModstageError, ValueError):
    """Raised when staging a version that already exists remotely."""

    def __init__(self, module: str, version: Any) -> None:
        message = f"remote version {version} already exists for module {module}"
        ModstageError.__init__(
            self, message, context={"module": module, "version": str(version)}
        )
        ValueError.__init__(self, message)
        self.module = module
        self.version = version


class InvalidVersionError(ModstageError, ValueError):
    """Raised when a string is not a valid semantic version."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModstageError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(ModstageError, RuntimeError):
    """Raised when configuration is missing or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModstageError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "ModstageError",
    "VcsError",
    "RemoteUnavailableError",
    "NoMatchingVersionError",
    "UnknownVersionError",
    "ReferenceResolutionError",
    "VersionAlreadyPublishedError",
    "InvalidVersionError",
    "ConfigError",
]
