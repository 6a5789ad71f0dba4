#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Core Data Models
Модели данных с валидацией и типизацией

Версия: 1.0.0
"""

import uuid
from datetime import datetime, tzinfo
from typing import Dict, Optional, Any, Iterable
from dataclasses import dataclass, field
from enum import Enum
import logging

from mood_diary.core.exceptions import ValidationError, EmptyInputError
from mood_diary.core.lexicon import EMOTION_DISPLAY, ADVICE
from mood_diary.utils.datetime_utils import now_in, parse_timestamp, format_long, format_day_month

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class Emotion(Enum):
    """Эмоциональная окраска записи"""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

    @property
    def score(self) -> int:
        """Полярность для графика: +1, 0, -1"""
        return EMOTION_DISPLAY[self.value][0]

    @property
    def emoji(self) -> str:
        return EMOTION_DISPLAY[self.value][1]

    @property
    def label(self) -> str:
        return EMOTION_DISPLAY[self.value][2]

    @property
    def advice(self) -> str:
        return ADVICE[self.value]

    @property
    def display(self) -> str:
        return f"{self.emoji} {self.label}"

# ===== VALIDATION HELPERS =====

def validate_text(text: Optional[str], max_length: Optional[int] = None, field_name: str = "text") -> str:
    """Валидация текста записи: не пустой и не из одних пробелов. Длина по умолчанию не ограничена"""
    if text is None or not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    if not text.strip():
        raise EmptyInputError(f"{field_name} не может быть пустым")

    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text

def validate_enum_value(value: str, enum_class: type, field_name: str = "value") -> str:
    """Валидация значений enum"""
    try:
        enum_class(value)
        return value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} должен быть одним из: {valid_values}")

# ===== CORE MODELS =====

@dataclass(frozen=True)
class DiaryEntry:
    """Запись дневника. После создания не изменяется."""
    id: str
    text: str
    emotion: Emotion
    advice: str
    timestamp: datetime = field(default_factory=now_in)

    def __post_init__(self):
        """Валидация после создания объекта"""
        if not self.id:
            raise ValidationError("id не может быть пустым")
        if not isinstance(self.emotion, Emotion):
            raise ValidationError(f"emotion должен быть Emotion, получено {self.emotion!r}")
        if not isinstance(self.timestamp, datetime):
            raise ValidationError("timestamp должен быть datetime")

    # ===== PROPERTIES =====

    @property
    def score(self) -> int:
        return self.emotion.score

    def date_label(self, tz: Optional[tzinfo] = None) -> str:
        """Подпись для оси графика: ДД.ММ"""
        return format_day_month(self.timestamp, tz)

    def display_date(self, tz: Optional[tzinfo] = None) -> str:
        """Дата для списка записей: "17 октября 2026 г. в 14:05" """
        return format_long(self.timestamp, tz)

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь"""
        return {
            "id": self.id,
            "text": self.text,
            "emotion": self.emotion.value,
            "advice": self.advice,
            "timestamp": self.timestamp.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], tz: Optional[tzinfo] = None) -> "DiaryEntry":
        """Десериализация из словаря"""
        try:
            emotion = validate_enum_value(data["emotion"], Emotion, "emotion")
            timestamp = data["timestamp"]
            if isinstance(timestamp, str):
                timestamp = parse_timestamp(timestamp, tz)
            return cls(
                id=str(data["id"]),
                text=data["text"],
                emotion=Emotion(emotion),
                advice=data.get("advice") or Emotion(emotion).advice,
                timestamp=timestamp
            )
        except ValidationError:
            raise
        except Exception as e:
            logger.error(f"Failed to deserialize diary entry: {e}")
            raise ValidationError(f"Не удалось загрузить запись: {e}")

    @classmethod
    def create(cls, text: str, emotion: Emotion, advice: Optional[str] = None,
               timestamp: Optional[datetime] = None,
               taken_ids: Iterable[str] = ()) -> "DiaryEntry":
        """Создание новой записи со свежим уникальным id"""
        taken = set(taken_ids)
        entry_id = str(uuid.uuid4())
        while entry_id in taken:
            entry_id = str(uuid.uuid4())

        return cls(
            id=entry_id,
            text=text,
            emotion=emotion,
            advice=advice if advice is not None else emotion.advice,
            timestamp=timestamp or now_in()
        )

__all__ = [
    'Emotion',
    'DiaryEntry',
    'validate_text',
    'validate_enum_value'
]
