"""Test helper modules for the modstage test suite.

- cache_utils: cache reset utilities for test isolation
- io_utils: YAML writing for project config overrides
- git_helpers: real git repositories acting as module remotes
- fake_vcs: in-memory remote client for overlay tests
"""
from __future__ import annotations
