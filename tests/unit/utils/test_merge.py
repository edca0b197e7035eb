from __future__ import annotations

from modstage.core.utils.merge import deep_merge, merge_arrays


def test_deep_merge_recurses_without_mutating_inputs() -> None:
    base = {"vcs": {"a": 1, "b": {"c": 2}}}
    override = {"vcs": {"b": {"d": 3}}, "logging": {"level": "INFO"}}
    merged = deep_merge(base, override)
    assert merged == {"vcs": {"a": 1, "b": {"c": 2, "d": 3}}, "logging": {"level": "INFO"}}
    assert base == {"vcs": {"a": 1, "b": {"c": 2}}}


def test_scalar_override_replaces() -> None:
    assert deep_merge({"a": {"b": 1}}, {"a": 5}) == {"a": 5}


def test_merge_arrays_modes() -> None:
    assert merge_arrays([1, 2], [3]) == [3]
    assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]
    assert merge_arrays([1, 2], ["=", 3]) == [3]
    assert merge_arrays([1, 2], []) == [1, 2]
