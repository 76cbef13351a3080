# SPDX-License-Identifier: MIT

import os
import time

import pytest

from daybook.repository.storage import FileKeyValueStore, MemoryKeyValueStore


def test_absent_key_is_none(tmp_path):
    store = FileKeyValueStore(tmp_path)

    assert store.get("events") is None


def test_set_then_get(tmp_path):
    store = FileKeyValueStore(tmp_path)
    store.set("events", "- name: a\n")

    assert store.get("events") == "- name: a\n"
    assert (tmp_path / "events.yaml").is_file()
    assert not list(tmp_path.glob(".*.tmp"))


def test_set_creates_missing_directory(tmp_path):
    store = FileKeyValueStore(tmp_path / "nested" / "dir")
    store.set("events", "[]")

    assert store.get("events") == "[]"


def test_compare_and_set(tmp_path):
    store = FileKeyValueStore(tmp_path)

    assert store.compare_and_set("events", None, "one")
    assert not store.compare_and_set("events", None, "two")
    assert store.get("events") == "one"
    assert store.compare_and_set("events", "one", "two")
    assert store.get("events") == "two"


@pytest.mark.parametrize("key", ["", "../events", "a/b", "with space"])
def test_invalid_keys_are_rejected(tmp_path, key):
    store = FileKeyValueStore(tmp_path)

    with pytest.raises(ValueError):
        store.get(key)


def test_memory_store_compare_and_set():
    store = MemoryKeyValueStore({"events": "one"})

    assert not store.compare_and_set("events", "stale", "two")
    assert store.compare_and_set("events", "one", "two")
    assert store.get("events") == "two"


def test_compare_and_set_admits_one_of_two_racing_writers(tmp_path, monkeypatch):
    store = FileKeyValueStore(tmp_path)
    other_writer = FileKeyValueStore(tmp_path, lock_timeout=0.05)
    store.set("events", "one")
    other_results = []
    read_value = store.get

    def get_then_race(key):
        # Another writer with the same expected value arrives while the first holds the lock
        if not other_results:
            other_results.append(other_writer.compare_and_set(key, "one", "from other"))
        return read_value(key)

    monkeypatch.setattr(store, "get", get_then_race)

    assert store.compare_and_set("events", "one", "from store")
    assert other_results == [False]
    assert read_value("events") == "from store"
    assert not (tmp_path / ".events.lock").exists()


def test_compare_and_set_gives_up_on_a_held_lock(tmp_path):
    store = FileKeyValueStore(tmp_path, lock_timeout=0.05)
    (tmp_path / ".events.lock").touch()

    assert not store.compare_and_set("events", None, "one")
    assert store.get("events") is None


def test_compare_and_set_removes_a_stale_lock(tmp_path):
    store = FileKeyValueStore(tmp_path, lock_timeout=0.05)
    lock_path = tmp_path / ".events.lock"
    lock_path.touch()
    an_hour_ago = time.time() - 3600
    os.utime(lock_path, (an_hour_ago, an_hour_ago))

    assert store.compare_and_set("events", None, "one")
    assert store.get("events") == "one"
    assert not lock_path.exists()
