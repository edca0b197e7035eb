"""Domain-specific configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .vcs import VcsConfig

__all__ = ["LoggingConfig", "VcsConfig"]
