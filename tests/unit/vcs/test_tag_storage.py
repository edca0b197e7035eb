from __future__ import annotations

import threading

from modstage.core.vcs.tags import EphemeralTag, EphemeralTagStorage
from modstage.core.vcs.version import Version


def test_unknown_module_has_no_tags() -> None:
    storage = EphemeralTagStorage()
    assert storage.tags("example.com/unknown") == []
    assert "example.com/unknown" not in storage
    assert len(storage) == 0


def test_tag_appends_in_insertion_order() -> None:
    storage = EphemeralTagStorage()
    storage.tag("example.com/foo", Version("v0.1.0"), "abc123")
    storage.tag("example.com/foo", Version("v0.2.0"), "def456")

    assert storage.tags("example.com/foo") == [
        EphemeralTag(Version("v0.1.0"), "abc123"),
        EphemeralTag(Version("v0.2.0"), "def456"),
    ]


def test_retag_replaces_prior_entry_and_moves_it_last() -> None:
    storage = EphemeralTagStorage()
    storage.tag("example.com/foo", Version("v0.1.0"), "abc123")
    storage.tag("example.com/foo", Version("v0.2.0"), "def456")
    storage.tag("example.com/foo", Version("v0.1.0"), "fff000")

    tags = storage.tags("example.com/foo")
    assert [t.version for t in tags] == [Version("v0.2.0"), Version("v0.1.0")]
    assert tags[-1].short == "fff000"
    assert len(storage) == 2


def test_modules_are_independent() -> None:
    storage = EphemeralTagStorage()
    storage.tag("example.com/foo", Version("v1.0.0"), "aaa")
    storage.tag("example.com/bar", Version("v1.0.0"), "bbb")

    assert storage.tags("example.com/foo") == [EphemeralTag(Version("v1.0.0"), "aaa")]
    assert storage.tags("example.com/bar") == [EphemeralTag(Version("v1.0.0"), "bbb")]
    assert sorted(storage.modules()) == ["example.com/bar", "example.com/foo"]


def test_tags_returns_snapshot() -> None:
    storage = EphemeralTagStorage()
    storage.tag("example.com/foo", Version("v1.0.0"), "aaa")
    snapshot = storage.tags("example.com/foo")
    snapshot.clear()
    assert len(storage.tags("example.com/foo")) == 1


def test_concurrent_tagging_keeps_one_entry_per_version() -> None:
    storage = EphemeralTagStorage()
    versions = [Version(f"v0.{i}.0") for i in range(10)]

    def worker(n: int) -> None:
        for v in versions:
            storage.tag("example.com/foo", v, f"ref-{n}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    tags = storage.tags("example.com/foo")
    assert sorted(t.version.value for t in tags) == sorted(v.value for v in versions)


def test_introspection_while_new_modules_are_tagged() -> None:
    storage = EphemeralTagStorage()
    errors: list[Exception] = []
    done = threading.Event()

    def reader() -> None:
        try:
            while not done.is_set():
                storage.modules()
                len(storage)
                _ = "example.com/m0" in storage
        except Exception as exc:
            errors.append(exc)

    t = threading.Thread(target=reader)
    t.start()
    try:
        for i in range(2000):
            storage.tag(f"example.com/m{i}", Version("v0.1.0"), "abc123")
    finally:
        done.set()
        t.join()

    assert errors == []
    assert len(storage) == 2000
    assert len(storage.modules()) == 2000
