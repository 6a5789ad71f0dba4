#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Dashboard Dependencies
Сборка компонентов и провайдеры для FastAPI маршрутов
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from mood_diary.config import DiaryConfig
from mood_diary.core.database import DiaryDatabase
from mood_diary.core.preferences import PreferencesStore
from mood_diary.core.storage import BackupManager, JsonStorage
from mood_diary.services.diary_service import DiaryService
from mood_diary.services.playback import PlaybackAdapter

logger = logging.getLogger(__name__)

@dataclass
class DiaryComponents:
    """Всё, что живёт столько же, сколько приложение"""
    config: DiaryConfig
    storage: JsonStorage
    database: DiaryDatabase
    preferences: PreferencesStore
    service: DiaryService

# ===== ИНИЦИАЛИЗАЦИЯ КОМПОНЕНТОВ =====

def init_components(config: DiaryConfig, playback: Optional[PlaybackAdapter] = None) -> DiaryComponents:
    """Создать хранилище, загрузить дневник и собрать сервис"""
    logger.info("🔄 Инициализация хранилища дневника...")

    backup_manager = BackupManager(config.storage.backup_dir, config.storage.max_backups)
    storage = JsonStorage(config.storage.path, backup_manager)

    database = DiaryDatabase(storage, config.tz)
    database.load()
    if config.storage.backup_on_load:
        storage.backup()

    service = DiaryService(database, config, playback)
    logger.info(f"✅ Дневник загружен: {database.count()} записей")

    return DiaryComponents(
        config=config,
        storage=storage,
        database=database,
        preferences=PreferencesStore(storage),
        service=service
    )

# ===== ПРОВАЙДЕРЫ =====

def get_components(request: Request) -> DiaryComponents:
    return request.app.state.components

def get_diary_service(request: Request) -> DiaryService:
    return get_components(request).service

def get_preferences(request: Request) -> PreferencesStore:
    return get_components(request).preferences

def get_diary_config(request: Request) -> DiaryConfig:
    return get_components(request).config
