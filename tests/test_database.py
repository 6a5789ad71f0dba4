import json
from datetime import timedelta

import pytest

from mood_diary.core.database import ENTRIES_KEY, SEED_ENTRIES, DiaryDatabase
from mood_diary.core.exceptions import StorageError, StorageWriteError, ValidationError
from mood_diary.core.models import DiaryEntry, Emotion
from mood_diary.core.storage import JsonStorage
from mood_diary.utils.datetime_utils import MOSCOW_TZ

from conftest import START, StepClock

def test_first_load_seeds_three_entries(database, storage):
    entries = database.load()

    assert [e.emotion for e in entries] == [Emotion.NEGATIVE, Emotion.NEUTRAL, Emotion.POSITIVE]
    assert [e.text for e in entries] == [text for _, text, _ in SEED_ENTRIES]
    assert entries[0].timestamp - entries[2].timestamp == timedelta(days=2)
    assert len({e.id for e in entries}) == 3
    assert database.stats.seeded
    assert len(storage.get(ENTRIES_KEY)) == 3

def test_seed_happens_once(database, diary_config):
    database.load()
    database.delete(database.list()[0].id)

    reopened = DiaryDatabase(JsonStorage(diary_config.storage.path), MOSCOW_TZ)
    entries = reopened.load()

    assert len(entries) == 2
    assert not reopened.stats.seeded

def test_empty_collection_is_not_reseeded(empty_database, storage):
    reopened = DiaryDatabase(JsonStorage(storage.data_file), MOSCOW_TZ)
    assert reopened.load() == []

def test_append_puts_new_entry_first(empty_database):
    first = empty_database.append("Всё хорошо", Emotion.POSITIVE)
    second = empty_database.append("Обычный день", Emotion.NEUTRAL)

    entries = empty_database.list()
    assert entries == [second, first]
    assert second.advice == Emotion.NEUTRAL.advice
    assert second.timestamp > first.timestamp

def test_append_ids_are_unique(empty_database):
    ids = {empty_database.append(f"запись {i}", Emotion.NEUTRAL).id for i in range(20)}
    assert len(ids) == 20
    assert len(empty_database) == 20

def test_append_rejects_foreign_advice(empty_database):
    with pytest.raises(ValidationError):
        empty_database.append("текст", Emotion.POSITIVE, Emotion.NEGATIVE.advice)
    assert empty_database.count() == 0

def test_list_returns_snapshot(empty_database):
    empty_database.append("текст", Emotion.NEUTRAL)
    snapshot = empty_database.list()
    snapshot.clear()
    assert empty_database.count() == 1

def test_delete_existing(empty_database):
    keep = empty_database.append("первая", Emotion.POSITIVE)
    drop = empty_database.append("вторая", Emotion.NEGATIVE)

    assert empty_database.delete(drop.id) is True
    assert empty_database.list() == [keep]
    assert empty_database.get(drop.id) is None

def test_delete_unknown_does_not_write(empty_database, storage):
    empty_database.append("первая", Emotion.POSITIVE)
    saves = empty_database.stats.save_count
    mtime = storage.data_file.stat().st_mtime_ns

    assert empty_database.delete("missing") is False
    assert empty_database.count() == 1
    assert empty_database.stats.save_count == saves
    assert storage.data_file.stat().st_mtime_ns == mtime

def test_round_trip(empty_database, storage):
    empty_database.append("Радостный день", Emotion.POSITIVE)
    empty_database.append("Тяжело", Emotion.NEGATIVE)
    original = empty_database.list()

    restored = DiaryDatabase(JsonStorage(storage.data_file), MOSCOW_TZ).load()

    assert restored == original
    assert [e.display_date(MOSCOW_TZ) for e in restored] == [e.display_date(MOSCOW_TZ) for e in original]

def test_failed_write_leaves_store_unchanged(empty_database, storage, monkeypatch):
    kept = empty_database.append("первая", Emotion.POSITIVE)
    on_disk = storage.data_file.read_text(encoding="utf-8")

    def broken_replace(self, target):
        raise OSError("disk full")

    monkeypatch.setattr(type(storage.data_file), "replace", broken_replace)

    with pytest.raises(StorageWriteError):
        empty_database.append("вторая", Emotion.NEGATIVE)
    with pytest.raises(StorageWriteError):
        empty_database.delete(kept.id)

    monkeypatch.undo()
    assert empty_database.list() == [kept]
    assert storage.data_file.read_text(encoding="utf-8") == on_disk
    assert not storage.data_file.with_suffix(".tmp").exists()
    assert empty_database.stats.error_count == 2

def test_load_skips_malformed_and_duplicate_records(storage):
    good = DiaryEntry.create("хорошо", Emotion.POSITIVE, timestamp=START).to_dict()
    storage.set(ENTRIES_KEY, [
        good,
        {"id": "x", "text": "нет эмоции", "timestamp": START.isoformat()},
        {"id": "y", "text": "плохая эмоция", "emotion": "angry", "timestamp": START.isoformat()},
        "not a record",
        dict(good, text="дубликат"),
    ])

    db = DiaryDatabase(storage, MOSCOW_TZ)
    entries = db.load()

    assert [e.text for e in entries] == ["хорошо"]
    assert db.stats.skipped_records == 4

def test_load_rejects_non_list_blob(storage):
    storage.set(ENTRIES_KEY, {"id": "1"})
    with pytest.raises(StorageError):
        DiaryDatabase(storage, MOSCOW_TZ).load()

def test_browser_timestamps_are_accepted(storage):
    # формат JSON.stringify(new Date())
    storage.set(ENTRIES_KEY, [{
        "id": "1718020800000",
        "text": "Сегодня было отлично",
        "emotion": "positive",
        "advice": Emotion.POSITIVE.advice,
        "timestamp": "2025-06-10T12:00:00.000Z",
    }])

    entry = DiaryDatabase(storage, MOSCOW_TZ).load()[0]

    assert entry.date_label(MOSCOW_TZ) == "10.06"
    assert entry.display_date(MOSCOW_TZ) == "10 июня 2025 г. в 15:00"

def test_missing_advice_falls_back_to_emotion(storage):
    storage.set(ENTRIES_KEY, [{
        "id": "1", "text": "тяжело", "emotion": "negative", "timestamp": START.isoformat()
    }])
    entry = DiaryDatabase(storage, MOSCOW_TZ).load()[0]
    assert entry.advice == Emotion.NEGATIVE.advice

def test_operations_load_lazily(storage):
    db = DiaryDatabase(storage, MOSCOW_TZ, StepClock())
    assert db.count() == 3
    assert db.is_initialized

def test_file_is_plain_json(empty_database, storage):
    entry = empty_database.append("Люблю осень", Emotion.POSITIVE)
    blob = json.loads(storage.data_file.read_text(encoding="utf-8"))
    assert blob[ENTRIES_KEY][0]["id"] == entry.id
    assert blob[ENTRIES_KEY][0]["emotion"] == "positive"
