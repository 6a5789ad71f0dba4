"""
AI-Дневник Настроения

Голосовой или текстовый дневник: определяет эмоцию записи, даёт совет,
хранит историю и строит график настроения.
"""

__version__ = "1.0.0"

from mood_diary.core import DiaryEntry, Emotion, classify
from mood_diary.services import DiaryService

__all__ = [
    '__version__',
    'DiaryEntry',
    'Emotion',
    'classify',
    'DiaryService'
]
