from __future__ import annotations

from modstage.core.vcs.git import Auth, parse_ls_remote_tags
from modstage.core.vcs.version import Version


def test_parse_keeps_semver_tags_in_git_order() -> None:
    stdout = (
        "1111111111111111111111111111111111111111\trefs/tags/v1.1.0\n"
        "2222222222222222222222222222222222222222\trefs/tags/v1.0.0\n"
        "3333333333333333333333333333333333333333\trefs/tags/nightly\n"
        "4444444444444444444444444444444444444444\trefs/heads/main\n"
        "5555555555555555555555555555555555555555\trefs/tags/v2.0.0-rc.1\n"
    )
    assert parse_ls_remote_tags(stdout) == [
        Version("v1.1.0"),
        Version("v1.0.0"),
        Version("v2.0.0-rc.1"),
    ]


def test_parse_empty_output() -> None:
    assert parse_ls_remote_tags("") == []
    assert parse_ls_remote_tags("\n\n") == []


def test_auth_env_carries_basic_header_without_exposing_password_in_repr() -> None:
    auth = Auth("ci", "s3cret")
    env = auth.git_env()
    assert env["GIT_CONFIG_COUNT"] == "1"
    assert env["GIT_CONFIG_KEY_0"] == "http.extraHeader"
    # base64("ci:s3cret")
    assert env["GIT_CONFIG_VALUE_0"] == "Authorization: Basic Y2k6czNjcmV0"
    assert "s3cret" not in repr(auth)
