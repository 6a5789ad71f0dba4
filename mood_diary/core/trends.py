# -*- coding: utf-8 -*-
"""
Mood Diary - Trend Aggregator
Числовой ряд настроения для графика по последним записям.
"""

from datetime import tzinfo
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Union
import logging

from mood_diary.core.database import DiaryDatabase
from mood_diary.core.models import DiaryEntry, Emotion

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 10

EMPTY_CHART_MESSAGE = "Сделай несколько записей, чтобы увидеть график"

class TrendPoint(NamedTuple):
    label: str
    value: int

def trend_series(store: Union[DiaryDatabase, Iterable[DiaryEntry]],
                 limit: int = DEFAULT_WINDOW,
                 tz: Optional[tzinfo] = None) -> List[TrendPoint]:
    """
    Последние ``limit`` записей в хронологическом порядке.

    Хранилище отдаёт записи новыми первыми: берём первые ``limit`` и
    разворачиваем. Пустое хранилище даёт пустой ряд - это "мало данных",
    а не ошибка.
    """
    if limit < 1:
        raise ValueError("limit должен быть положительным")

    entries = store.list() if isinstance(store, DiaryDatabase) else list(store)
    recent = entries[:limit]
    return [TrendPoint(e.date_label(tz), e.emotion.score) for e in reversed(recent)]

def emotion_for_value(value: float) -> Emotion:
    """Обратное отображение значения графика в эмоцию (для подсказок)"""
    if value > 0:
        return Emotion.POSITIVE
    if value < 0:
        return Emotion.NEGATIVE
    return Emotion.NEUTRAL

def build_trend_chart(points: List[TrendPoint]) -> Dict[str, Any]:
    """Данные для линейного графика настроения"""
    if not points:
        return {
            "empty": True,
            "message": EMPTY_CHART_MESSAGE,
            "labels": [],
            "datasets": []
        }

    values = [p.value for p in points]
    return {
        "empty": False,
        "labels": [p.label for p in points],
        "datasets": [
            {
                "label": "Настроение",
                "data": values,
                "tooltips": [emotion_for_value(v).display for v in values],
                "borderWidth": 3,
                "pointRadius": 5,
                "tension": 0.4,
                "fill": False
            }
        ],
        "options": {
            "responsive": True,
            "plugins": {
                "title": {
                    "display": True,
                    "text": "График настроения"
                },
                "subtitle": {
                    "display": True,
                    "text": "Динамика твоих эмоций за последние записи"
                },
                "legend": {
                    "display": False
                }
            },
            "scales": {
                "y": {
                    "min": -1,
                    "max": 1,
                    "ticks": {
                        "stepSize": 1
                    }
                }
            }
        }
    }

__all__ = [
    'DEFAULT_WINDOW',
    'EMPTY_CHART_MESSAGE',
    'TrendPoint',
    'trend_series',
    'emotion_for_value',
    'build_trend_chart'
]
