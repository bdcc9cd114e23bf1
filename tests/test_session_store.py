from __future__ import annotations

import json
from pathlib import Path

from retail_console_sdk.models import UserIdentity
from retail_console_sdk.session import TOKEN_KEY, USER_KEY, SessionStore
from retail_console_sdk.storage import FileKeyValueStore, MemoryKeyValueStore

ADMIN = UserIdentity(id="1", email="admin@example.com", name="admin", role="admin")


def test_set_persists_token_and_user_json() -> None:
    storage = MemoryKeyValueStore()
    store = SessionStore(storage)

    session = store.set("tok", ADMIN)

    assert session.token == "tok"
    assert session.user == ADMIN
    assert storage.get(TOKEN_KEY) == "tok"
    assert json.loads(storage.get(USER_KEY) or "{}") == {
        "id": "1",
        "email": "admin@example.com",
        "name": "admin",
        "role": "admin",
    }


def test_clear_removes_both_keys_and_notifies() -> None:
    storage = MemoryKeyValueStore()
    store = SessionStore(storage)
    events: list[str] = []
    store.on_change(lambda session, reason: events.append(reason))

    store.set("tok", ADMIN)
    store.clear()

    assert storage.values == {}
    assert events == ["login", "logout"]
    assert store.get().is_authenticated is False


def test_unsubscribe_stops_notifications() -> None:
    store = SessionStore(MemoryKeyValueStore())
    events: list[str] = []
    unsubscribe = store.on_change(lambda session, reason: events.append(reason))

    unsubscribe()
    store.set("tok", ADMIN)

    assert events == []


def test_invalidate_only_once_per_generation() -> None:
    store = SessionStore(MemoryKeyValueStore())
    generation = store.set("tok", ADMIN).generation

    assert store.invalidate(generation) is True
    assert store.invalidate(generation) is False
    assert store.get().token is None

    next_generation = store.set("tok-2", ADMIN).generation
    assert next_generation == generation + 1
    assert store.invalidate(next_generation) is True


def test_update_user_keeps_token() -> None:
    store = SessionStore(MemoryKeyValueStore())
    store.set("tok", ADMIN)

    store.update_user(ADMIN.model_copy(update={"name": "Administrator"}))

    session = store.get()
    assert session.token == "tok"
    assert session.user is not None and session.user.name == "Administrator"


def test_corrupt_user_is_dropped() -> None:
    storage = MemoryKeyValueStore({TOKEN_KEY: "tok", USER_KEY: "{not json"})
    store = SessionStore(storage)

    session = store.get()

    assert session.token == "tok"
    assert session.user is None
    assert USER_KEY not in storage.values


def test_file_store_survives_new_instances(tmp_path: Path) -> None:
    SessionStore(FileKeyValueStore(directory=tmp_path)).set("tok", ADMIN)

    restored = SessionStore(FileKeyValueStore(directory=tmp_path)).get()

    assert restored.token == "tok"
    assert restored.user == ADMIN


def test_file_store_recovers_from_corrupt_file(tmp_path: Path) -> None:
    (tmp_path / "storage.json").write_text("[]", encoding="utf-8")
    storage = FileKeyValueStore(directory=tmp_path)

    assert storage.get(TOKEN_KEY) is None
    storage.set(TOKEN_KEY, "tok")
    storage.delete(TOKEN_KEY)
    assert json.loads((tmp_path / "storage.json").read_text(encoding="utf-8")) == {}
