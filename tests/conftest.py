from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from mood_diary.config import DiaryConfig
from mood_diary.core.database import DiaryDatabase
from mood_diary.core.exceptions import CaptureError
from mood_diary.core.storage import BackupManager, JsonStorage
from mood_diary.services.capture import CaptureAdapter
from mood_diary.services.playback import PlaybackAdapter, Utterance
from mood_diary.utils.datetime_utils import MOSCOW_TZ

START = MOSCOW_TZ.localize(datetime(2026, 10, 17, 14, 5))

class StepClock:
    """Каждый вызов на минуту позже предыдущего"""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now

class FakeAdapter(CaptureAdapter):
    def __init__(self, transcript: str = "", error: Optional[CaptureError] = None):
        self.transcript = transcript
        self.error = error
        self.calls = 0

    def capture(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.transcript

class RecordingPlayback(PlaybackAdapter):
    def __init__(self):
        self.spoken: List[Utterance] = []
        self.closed = False

    def speak(self, utterance: Utterance) -> None:
        self.spoken.append(utterance)

    def close(self) -> None:
        self.closed = True

@pytest.fixture
def diary_config(tmp_path):
    return DiaryConfig(
        data_dir=tmp_path / "data",
        backup_dir=tmp_path / "backups",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        timezone="Europe/Moscow",
        trend_window=10,
        analysis_delay_seconds=0
    )

@pytest.fixture
def clock():
    return StepClock()

@pytest.fixture
def backup_manager(diary_config):
    return BackupManager(diary_config.storage.backup_dir, diary_config.storage.max_backups)

@pytest.fixture
def storage(diary_config, backup_manager):
    return JsonStorage(diary_config.storage.path, backup_manager)

@pytest.fixture
def database(storage, clock):
    """Не загруженное хранилище: первый load() засеет примеры"""
    return DiaryDatabase(storage, MOSCOW_TZ, clock)

@pytest.fixture
def empty_database(storage, clock):
    storage.set("mood-diary-entries", [])
    db = DiaryDatabase(storage, MOSCOW_TZ, clock)
    db.load()
    return db

@pytest.fixture
def playback():
    return RecordingPlayback()
