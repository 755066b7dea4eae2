# tests/test_session_store.py

from __future__ import annotations

import json
from pathlib import Path

from linkflow.core.models import Session
from linkflow.session.store import JsonFileSessionStore, MemorySessionStore


def test_set_get_clear_roundtrip_on_disk(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    store = JsonFileSessionStore(path)
    store.init()
    assert store.get() is None

    session = Session(token="abc", created_at=1700000000.5)
    store.set(session)

    assert store.get() == session
    assert json.loads(path.read_text("utf-8"))["auth_token"] == "abc"
    assert not path.with_suffix(".tmp").exists()

    restarted = JsonFileSessionStore(path)
    restarted.init()
    assert restarted.get() == session

    store.clear()
    assert store.get() is None
    assert not path.exists()

    # clearing twice is fine
    store.clear()


def test_set_overwrites_previous_session(tmp_path: Path) -> None:
    store = JsonFileSessionStore(tmp_path / "session.json")
    store.set(Session(token="old", created_at=1.0))
    store.set(Session(token="new", created_at=2.0))

    restarted = JsonFileSessionStore(tmp_path / "session.json")
    restarted.init()
    assert restarted.get() == Session(token="new", created_at=2.0)


def test_corrupt_file_reads_as_logged_out(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", "utf-8")

    store = JsonFileSessionStore(path)
    store.init()

    assert store.get() is None


def test_file_without_token_reads_as_logged_out(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"auth_token": "", "created_at": 5}), "utf-8")

    store = JsonFileSessionStore(path)
    store.init()

    assert store.get() is None


def test_memory_store() -> None:
    store = MemorySessionStore()
    assert store.get() is None

    store.set(Session(token="t", created_at=0.0))
    assert store.get() == Session(token="t", created_at=0.0)

    store.clear()
    assert store.get() is None
