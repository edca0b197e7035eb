import os
import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'modstage' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_modstage_caches


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "requires_git: marks tests that run the git executable"
    )


def pytest_collection_modifyitems(config, items):
    if shutil.which("git") is not None:
        return
    skip_marker = pytest.mark.skip(reason="git executable not available in this environment")
    for item in items:
        if "requires_git" in item.keywords:
            item.add_marker(skip_marker)


@pytest.fixture(autouse=True)
def _isolate_modstage(monkeypatch):
    """Clear config caches and MODSTAGE_* overrides leaking from the developer shell."""
    for key in list(os.environ):
        if key.startswith("MODSTAGE_"):
            monkeypatch.delenv(key, raising=False)
    reset_modstage_caches()
    yield
    reset_modstage_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """Project root in tmp_path with an empty .modstage/config directory."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".modstage" / "config").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def git_env(monkeypatch):
    """Deterministic git identity for commits made by tests."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
