# -*- coding: utf-8 -*-
"""
Mood Diary - Classifier
Лексический классификатор эмоциональной окраски текста.

Считается число *различных* маркеров каждой полярности, входящих в текст
как подстрока (в том числе внутри длинного слова). Больше позитивных -
positive, больше негативных - negative, иначе (и при 0/0) - neutral.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, Union

from mood_diary.core.lexicon import POSITIVE_MARKERS, NEGATIVE_MARKERS
from mood_diary.core.models import Emotion

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class MarkerScore:
    """Найденные маркеры обеих полярностей"""
    positive: FrozenSet[str]
    negative: FrozenSet[str]

    @property
    def positive_count(self) -> int:
        return len(self.positive)

    @property
    def negative_count(self) -> int:
        return len(self.negative)

@dataclass(frozen=True)
class ClassificationResult:
    """Результат анализа: эмоция и закреплённый за ней совет"""
    emotion: Emotion
    advice: str

    def __iter__(self) -> Iterator[Union[Emotion, str]]:
        # позволяет писать emotion, advice = classify(text)
        return iter((self.emotion, self.advice))

def score_text(text: str) -> MarkerScore:
    lowered = text.lower()
    return MarkerScore(
        positive=frozenset(m for m in POSITIVE_MARKERS if m in lowered),
        negative=frozenset(m for m in NEGATIVE_MARKERS if m in lowered),
    )

def decide(positive_count: int, negative_count: int) -> Emotion:
    if positive_count > negative_count:
        return Emotion.POSITIVE
    if negative_count > positive_count:
        return Emotion.NEGATIVE
    return Emotion.NEUTRAL

def classify(text: str) -> ClassificationResult:
    """Определить эмоцию текста и вернуть её вместе с советом"""
    score = score_text(text)
    emotion = decide(score.positive_count, score.negative_count)
    logger.debug(
        f"Classified text ({len(text)} chars): +{sorted(score.positive)} "
        f"-{sorted(score.negative)} -> {emotion.value}"
    )
    return ClassificationResult(emotion=emotion, advice=emotion.advice)
