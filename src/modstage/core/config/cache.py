"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Domain configs use this module's cache instead of loading YAML
themselves.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import hashlib
import os

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path, validate: bool = True) -> str:
    """Generate a cache key from repo_root, the validate flag, MODSTAGE_* env
    vars and config mtimes.

    Environment overrides and project YAML files may change during a
    long-running process; both are fingerprinted so cache hits never return
    stale config.
    """
    from .manager import ENV_PREFIX, PROJECT_CONFIG_DIRNAME

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    cfg_dir = repo_root / PROJECT_CONFIG_DIRNAME / "config"
    files: list[tuple[str, int, int]] = []
    if cfg_dir.is_dir():
        for p in sorted(cfg_dir.iterdir()):
            if p.suffix not in {".yaml", ".yml"}:
                continue
            try:
                st = p.stat()
            except OSError:
                continue
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:validate={int(validate)}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root, avoiding
    repeated file I/O. Treat the returned dict as immutable.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)

    if key not in _config_cache:
        # Lazy import to avoid circular dependency
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached configuration (call after editing config files)."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = True) -> bool:
    """Check if config for repo_root is cached."""
    return _cache_key(_normalize_repo_root(repo_root), validate) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
