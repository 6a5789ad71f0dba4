#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Entry Store
Упорядоченная коллекция записей дневника (новые первыми) с сохранением
всей коллекции при каждом изменении.

Версия: 1.0.0
"""

import time
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Iterator, List, Optional, Any
from dataclasses import dataclass
import logging

from mood_diary.core.exceptions import StorageError, ValidationError
from mood_diary.core.models import DiaryEntry, Emotion
from mood_diary.core.storage import JsonStorage
from mood_diary.utils.datetime_utils import now_in

logger = logging.getLogger(__name__)

ENTRIES_KEY = "mood-diary-entries"

# (дней назад, текст, эмоция), новые первыми
SEED_ENTRIES = (
    (0, 'Я устал сегодня в школе, было тяжело. Много домашних заданий.', Emotion.NEGATIVE),
    (1, 'Работал весь день, ничего особенного не произошло. Обычный рабочий день.', Emotion.NEUTRAL),
    (2, 'Сегодня был отличный день! Встретился с друзьями, мы много смеялись и гуляли в парке.', Emotion.POSITIVE),
)

@dataclass
class DatabaseStats:
    """Статистика хранилища записей"""
    total_entries: int = 0
    save_count: int = 0
    load_count: int = 0
    error_count: int = 0
    skipped_records: int = 0
    seeded: bool = False
    last_save: Optional[str] = None

class DiaryDatabase:
    """Хранилище записей дневника. Единственный писатель коллекции."""

    def __init__(self, storage: JsonStorage, tz: Optional[tzinfo] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.storage = storage
        self.tz = tz
        self.clock = clock or (lambda: now_in(self.tz))
        self.stats = DatabaseStats()
        self.start_time = time.time()
        self.is_initialized = False
        self._entries: List[DiaryEntry] = []

    # ===== LIFECYCLE =====

    def load(self) -> List[DiaryEntry]:
        """Восстановить коллекцию или засеять примерами при первом запуске"""
        raw = self.storage.get(ENTRIES_KEY)

        if raw is None:
            logger.info("No persisted diary found, seeding example entries")
            seed = self._build_seed()
            self._persist(seed)
            self._entries = seed
            self.stats.seeded = True
        else:
            self._entries = self._deserialize(raw)

        self.stats.load_count += 1
        self.stats.total_entries = len(self._entries)
        self.is_initialized = True
        logger.info(f"Diary loaded with {len(self._entries)} entries")
        return self.list()

    def _build_seed(self) -> List[DiaryEntry]:
        now = self.clock()
        entries: List[DiaryEntry] = []
        for days_ago, text, emotion in SEED_ENTRIES:
            entries.append(DiaryEntry.create(
                text=text,
                emotion=emotion,
                timestamp=now - timedelta(days=days_ago),
                taken_ids=(e.id for e in entries)
            ))
        return entries

    def _deserialize(self, raw: Any) -> List[DiaryEntry]:
        if not isinstance(raw, list):
            raise StorageError(f"Expected a list under '{ENTRIES_KEY}', got {type(raw).__name__}")

        entries: List[DiaryEntry] = []
        seen_ids = set()
        for record in raw:
            try:
                entry = DiaryEntry.from_dict(record, self.tz)
            except (ValidationError, TypeError) as e:
                logger.warning(f"Failed to load diary entry {record!r:.80}: {e}")
                self.stats.skipped_records += 1
                continue
            if entry.id in seen_ids:
                logger.warning(f"Duplicate entry id {entry.id} skipped")
                self.stats.skipped_records += 1
                continue
            seen_ids.add(entry.id)
            entries.append(entry)
        return entries

    def _persist(self, entries: List[DiaryEntry]) -> None:
        try:
            self.storage.set(ENTRIES_KEY, [e.to_dict() for e in entries])
        except StorageError:
            self.stats.error_count += 1
            raise
        self.stats.save_count += 1
        self.stats.last_save = datetime.now().isoformat()

    def _ensure_loaded(self) -> None:
        if not self.is_initialized:
            self.load()

    # ===== PUBLIC API =====

    def append(self, text: str, emotion: Emotion, advice: Optional[str] = None) -> DiaryEntry:
        """Создать запись, вставить первой и сохранить коллекцию"""
        self._ensure_loaded()

        if advice is not None and advice != emotion.advice:
            raise ValidationError(f"advice не соответствует эмоции {emotion.value}")

        entry = DiaryEntry.create(
            text=text,
            emotion=emotion,
            timestamp=self.clock(),
            taken_ids=(e.id for e in self._entries)
        )
        updated = [entry] + self._entries

        # В памяти меняем только после успешной записи
        self._persist(updated)
        self._entries = updated
        self.stats.total_entries = len(updated)

        logger.info(f"Diary entry {entry.id} saved ({emotion.value})")
        return entry

    def list(self) -> List[DiaryEntry]:
        """Снимок записей, новые первыми"""
        self._ensure_loaded()
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[DiaryEntry]:
        self._ensure_loaded()
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def delete(self, entry_id: str) -> bool:
        """Удалить запись; для несуществующего id ничего не делает"""
        self._ensure_loaded()

        updated = [e for e in self._entries if e.id != entry_id]
        if len(updated) == len(self._entries):
            logger.debug(f"Delete requested for unknown entry {entry_id}")
            return False

        self._persist(updated)
        self._entries = updated
        self.stats.total_entries = len(updated)

        logger.info(f"Diary entry {entry_id} deleted")
        return True

    def count(self) -> int:
        self._ensure_loaded()
        return len(self._entries)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[DiaryEntry]:
        return iter(self.list())

    def get_stats(self) -> dict:
        return {
            "total_entries": self.stats.total_entries,
            "save_count": self.stats.save_count,
            "load_count": self.stats.load_count,
            "error_count": self.stats.error_count,
            "skipped_records": self.stats.skipped_records,
            "seeded": self.stats.seeded,
            "last_save": self.stats.last_save,
            "uptime_seconds": int(time.time() - self.start_time)
        }

__all__ = [
    'ENTRIES_KEY',
    'SEED_ENTRIES',
    'DatabaseStats',
    'DiaryDatabase'
]
