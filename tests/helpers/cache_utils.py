"""Cache utilities for test isolation."""
from __future__ import annotations


def reset_modstage_caches() -> None:
    """Reset module-level caches so each test sees fresh configuration."""
    from modstage.core.config.cache import clear_all_caches
    from modstage.data import read_yaml

    clear_all_caches()
    read_yaml.cache_clear()
