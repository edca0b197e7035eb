"""Domain-specific configuration for the git remote client.

Provides cached access to git timeouts and mirror layout settings.
"""
from __future__ import annotations

from functools import cached_property

from modstage.core.exceptions import ConfigError

from ..base import BaseDomainConfig

_REQUIRED_VCS_KEYS = (
    "git_executable",
    "git_operations_seconds",
    "default_scheme",
    "mirror_dirname",
)


class VcsConfig(BaseDomainConfig):
    """Typed, cached access to the ``vcs`` configuration section."""

    def _config_section(self) -> str:
        return "vcs"

    def _validate_required_keys(self) -> None:
        if not self.section:
            raise ConfigError("vcs section missing from configuration")
        for key in _REQUIRED_VCS_KEYS:
            if key not in self.section:
                raise ConfigError(f"vcs.{key} missing from configuration")

    @cached_property
    def git_executable(self) -> str:
        """Name or path of the git executable."""
        self._validate_required_keys()
        return str(self.section["git_executable"])

    @cached_property
    def git_operations_seconds(self) -> float:
        """Timeout for a single git invocation in seconds."""
        self._validate_required_keys()
        return float(self.section["git_operations_seconds"])

    @cached_property
    def default_scheme(self) -> str:
        """URL scheme used to derive a remote URL from a module path."""
        self._validate_required_keys()
        return str(self.section["default_scheme"])

    @cached_property
    def mirror_dirname(self) -> str:
        """Name of the bare mirror repository inside a client's directory."""
        self._validate_required_keys()
        return str(self.section["mirror_dirname"])


__all__ = ["VcsConfig"]
