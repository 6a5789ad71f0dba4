#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Core Package
Классификатор, хранилище записей и агрегатор тренда
"""

from .exceptions import (
    MoodDiaryError,
    ValidationError,
    EmptyInputError,
    SaveWithoutClassificationError,
    StorageError,
    StorageWriteError,
    StorageCorruptionError
)

from .models import (
    Emotion,
    DiaryEntry
)

from .classifier import (
    ClassificationResult,
    classify,
    score_text
)

from .storage import (
    BackupManager,
    JsonStorage
)

from .database import (
    DiaryDatabase
)

from .trends import (
    TrendPoint,
    trend_series,
    emotion_for_value,
    build_trend_chart
)

from .preferences import (
    Theme,
    PreferencesStore
)

__all__ = [
    # Errors
    'MoodDiaryError',
    'ValidationError',
    'EmptyInputError',
    'SaveWithoutClassificationError',
    'StorageError',
    'StorageWriteError',
    'StorageCorruptionError',

    # Models
    'Emotion',
    'DiaryEntry',

    # Classifier
    'ClassificationResult',
    'classify',
    'score_text',

    # Persistence
    'BackupManager',
    'JsonStorage',
    'DiaryDatabase',

    # Trend
    'TrendPoint',
    'trend_series',
    'emotion_for_value',
    'build_trend_chart',

    # Preferences
    'Theme',
    'PreferencesStore'
]
