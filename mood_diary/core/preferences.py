# -*- coding: utf-8 -*-
"""
Mood Diary - Preferences
Светлая/тёмная тема, хранится отдельным ключом рядом с дневником.
"""

from enum import Enum
import logging

from mood_diary.core.storage import JsonStorage

logger = logging.getLogger(__name__)

THEME_KEY = "mood-diary-theme"

class Theme(Enum):
    """Темы оформления"""
    LIGHT = "light"
    DARK = "dark"

class PreferencesStore:
    """Настройки отображения"""

    def __init__(self, storage: JsonStorage):
        self.storage = storage

    def get_theme(self) -> Theme:
        # всё, что не "dark", считается светлой темой
        return Theme.DARK if self.storage.get(THEME_KEY) == Theme.DARK.value else Theme.LIGHT

    def set_theme(self, theme: Theme) -> Theme:
        self.storage.set(THEME_KEY, theme.value)
        logger.info(f"Theme set to {theme.value}")
        return theme

    def toggle_theme(self) -> Theme:
        current = self.get_theme()
        return self.set_theme(Theme.LIGHT if current == Theme.DARK else Theme.DARK)
