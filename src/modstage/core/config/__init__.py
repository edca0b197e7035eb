"""modstage configuration system.

Usage:
    from modstage.core.config import ConfigManager
    from modstage.core.config.domains import VcsConfig

    config = ConfigManager(repo_root=Path("/path/to/project")).load_config()
    timeout = VcsConfig(repo_root=Path("/path/to/project")).git_operations_seconds
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import LoggingConfig, VcsConfig

__all__ = [
    "ConfigManager",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "BaseDomainConfig",
    "LoggingConfig",
    "VcsConfig",
]
