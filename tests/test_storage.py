import json

import pytest

from models import BudgetRange, GroupSize, Transportation, UserPreferences
from storage import (
    JsonFileStorage,
    MemoryStorage,
    PreferenceStore,
    get_session,
    save_session
)


@pytest.fixture
def preferences():
    return UserPreferences(
        interests=("food",),
        budget_range=BudgetRange.LOW,
        transportation=Transportation.TRANSIT,
        group_size=GroupSize.COUPLE,
        favorite_areas=("langley", "surrey"),
    )


class BrokenStorage:
    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("read-only file system")


def test_no_preferences_yet():
    store = PreferenceStore(MemoryStorage())

    assert store.load(42) is None


def test_save_then_load(preferences):
    store = PreferenceStore(MemoryStorage())

    assert store.save(42, preferences)

    assert store.load(42) == preferences
    assert store.load(43) is None


def test_file_storage_survives_a_new_instance(tmp_path, preferences):
    path = str(tmp_path / "prefs.json")
    PreferenceStore(JsonFileStorage(path)).save(7, preferences)

    assert PreferenceStore(JsonFileStorage(path)).load(7) == preferences

    with open(path, encoding="utf-8") as fh:
        stored = json.load(fh)
    assert json.loads(stored["preferences:7"])["budgetRange"] == "low"


def test_file_storage_keeps_other_keys(tmp_path):
    storage = JsonFileStorage(str(tmp_path / "kv.json"))

    storage.set("a", "1")
    storage.set("b", "2")

    assert storage.get("a") == "1"
    assert storage.get("b") == "2"
    assert storage.get("c") is None


def test_storage_failures_degrade(preferences):
    store = PreferenceStore(BrokenStorage())

    assert store.save(1, preferences) is False
    assert store.load(1) is None


def test_corrupt_file_means_no_preferences(tmp_path, preferences):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    store = PreferenceStore(JsonFileStorage(str(path)))

    assert store.load(1) is None

    # Writing replaces the unreadable file
    assert store.save(1, preferences)
    assert store.load(1) == preferences


def test_invalid_stored_record_means_no_preferences():
    storage = MemoryStorage()
    storage.set("preferences:1", json.dumps({"interests": ["food"]}))

    assert PreferenceStore(storage).load(1) is None


def test_sessions_are_per_chat():
    session = get_session(1001)
    session.conversation.append_user_message("hi")
    save_session(session)

    assert get_session(1001).conversation.messages[0].content == "hi"
    assert get_session(1002).conversation.messages == []


def test_failed_write_leaves_no_temp_file(tmp_path, monkeypatch):
    path = tmp_path / "prefs.json"
    storage = JsonFileStorage(str(path))
    storage.set("a", "1")

    def broken_dump(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("storage.json.dump", broken_dump)

    with pytest.raises(OSError):
        storage.set("b", "2")

    assert not (tmp_path / "prefs.json.tmp").exists()
    monkeypatch.undo()
    assert storage.get("a") == "1"
    assert storage.get("b") is None
