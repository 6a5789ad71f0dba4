# -*- coding: utf-8 -*-
"""
Mood Diary - Lexicon
Статические таблицы: маркеры полярности, оформление эмоций, советы.

Маркеры - основы слов, а не целые слова: "радост" совпадает и с
"радость", и с "радостный". Сопоставление - простое вхождение подстроки
в текст в нижнем регистре.
"""

from types import MappingProxyType

POSITIVE_MARKERS = frozenset({
    'хорошо', 'отличн', 'радост', 'счастлив', 'весел',
    'классно', 'круто', 'люблю', 'прекрасно',
})

NEGATIVE_MARKERS = frozenset({
    'плохо', 'грустно', 'устал', 'тяжело', 'болит',
    'печаль', 'одинок', 'страшно', 'больно',
})

# emotion -> (score, emoji, label)
EMOTION_DISPLAY = MappingProxyType({
    'positive': (1, '😊', 'Позитивное'),
    'neutral': (0, '😐', 'Нейтральное'),
    'negative': (-1, '😔', 'Негативное'),
})

ADVICE = MappingProxyType({
    'positive': 'Кажется, у тебя отличное настроение! Запиши, что сделало этот день таким классным.',
    'neutral': 'Спокойный день — тоже хорошо. Может, стоит попробовать сделать что-то приятное для себя?',
    'negative': 'Ты звучишь немного грустно. Попробуй глубоко вдохнуть. Что именно тебя расстроило? Можешь рассказать мне.',
})
