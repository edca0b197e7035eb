from __future__ import annotations

from pathlib import Path

import pytest

from modstage.core.config import ConfigManager, clear_all_caches, get_cached_config, is_cached
from modstage.core.exceptions import ConfigError

from helpers.io_utils import write_project_config


def test_bundled_defaults_load_and_validate(isolated_project_env: Path) -> None:
    cfg = ConfigManager(isolated_project_env).load_config()
    assert cfg["vcs"]["git_executable"] == "git"
    assert cfg["vcs"]["git_operations_seconds"] == 120
    assert cfg["vcs"]["default_scheme"] == "https"
    assert cfg["logging"]["level"] == "WARNING"


def test_project_yaml_overrides_defaults(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "vcs", {"vcs": {"git_operations_seconds": 15}})
    cfg = ConfigManager(isolated_project_env).load_config()
    assert cfg["vcs"]["git_operations_seconds"] == 15
    assert cfg["vcs"]["mirror_dirname"] == "mirror.git"


def test_project_files_merge_alphabetically(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "a-vcs", {"vcs": {"default_scheme": "http"}})
    write_project_config(isolated_project_env, "b-vcs", {"vcs": {"default_scheme": "ssh"}})
    cfg = ConfigManager(isolated_project_env).load_config()
    assert cfg["vcs"]["default_scheme"] == "ssh"


def test_env_overrides_win_and_are_typed(isolated_project_env: Path, monkeypatch) -> None:
    write_project_config(isolated_project_env, "vcs", {"vcs": {"git_operations_seconds": 15}})
    monkeypatch.setenv("MODSTAGE_VCS__GIT_OPERATIONS_SECONDS", "2.5")
    monkeypatch.setenv("MODSTAGE_LOGGING__LEVEL", "DEBUG")
    cfg = ConfigManager(isolated_project_env).load_config()
    assert cfg["vcs"]["git_operations_seconds"] == 2.5
    assert cfg["logging"]["level"] == "DEBUG"


def test_malformed_env_key_is_ignored(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("MODSTAGE_VERBOSE", "1")
    cfg = ConfigManager(isolated_project_env).load_config()
    assert "verbose" not in cfg


def test_schema_violation_raises_config_error(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "vcs", {"vcs": {"git_operations_seconds": -1}})
    with pytest.raises(ConfigError, match="vcs.git_operations_seconds"):
        ConfigManager(isolated_project_env).load_config()


def test_invalid_yaml_fails_closed(isolated_project_env: Path) -> None:
    bad = isolated_project_env / ".modstage" / "config" / "broken.yaml"
    bad.write_text("vcs: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigManager(isolated_project_env).load_config()


def test_non_mapping_yaml_rejected(isolated_project_env: Path) -> None:
    bad = isolated_project_env / ".modstage" / "config" / "list.yaml"
    bad.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        ConfigManager(isolated_project_env).load_config()


def test_cache_reuses_and_invalidates(isolated_project_env: Path) -> None:
    first = get_cached_config(isolated_project_env)
    assert is_cached(isolated_project_env)
    assert get_cached_config(isolated_project_env) is first

    write_project_config(isolated_project_env, "vcs", {"vcs": {"git_operations_seconds": 7}})
    assert get_cached_config(isolated_project_env)["vcs"]["git_operations_seconds"] == 7

    clear_all_caches()
    assert not is_cached(isolated_project_env)


def test_unvalidated_load_is_not_served_to_validating_callers(isolated_project_env: Path) -> None:
    write_project_config(isolated_project_env, "vcs", {"vcs": {"git_operations_seconds": -1}})

    raw = get_cached_config(isolated_project_env, validate=False)
    assert raw["vcs"]["git_operations_seconds"] == -1
    assert is_cached(isolated_project_env, validate=False)
    assert not is_cached(isolated_project_env)

    with pytest.raises(ConfigError, match="vcs.git_operations_seconds"):
        get_cached_config(isolated_project_env)
