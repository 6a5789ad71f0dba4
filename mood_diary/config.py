#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация хранилища дневника"""
    path: Path
    backup_dir: Path
    max_backups: int = 10
    backup_on_load: bool = True

@dataclass
class AnalysisConfig:
    """Конфигурация анализа и графика"""
    trend_window: int = 10
    analysis_delay_seconds: float = 0.0
    timezone: str = "Europe/Moscow"

@dataclass
class SpeechConfig:
    """Конфигурация голосового ввода и озвучки"""
    language: str = "ru-RU"
    phrase_time_limit: int = 30
    listen_timeout: int = 10
    voice_rate: float = 0.9
    voice_pitch: float = 1.0

class DiaryConfig:
    """Главный класс конфигурации"""

    def __init__(self, data_dir: Optional[Path] = None, **overrides: Any):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config(data_dir, overrides)
        self._validate_config()
        self._ensure_directories()

    def _load_config(self, data_dir: Optional[Path], overrides: Dict[str, Any]):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(data_dir or os.getenv('DATA_DIR', 'data'))
        self.backup_dir = Path(overrides.get('backup_dir') or os.getenv('BACKUP_DIR', self.data_dir / 'backups'))
        self.log_dir = Path(overrides.get('log_dir') or os.getenv('LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            path=self.data_dir / "mood_diary.json",
            backup_dir=self.backup_dir,
            max_backups=int(overrides.get('max_backups', os.getenv('MAX_BACKUPS', 10))),
            backup_on_load=str(overrides.get('backup_on_load', os.getenv('BACKUP_ON_LOAD', 'true'))).lower() == 'true'
        )

        # Анализ
        self.analysis = AnalysisConfig(
            trend_window=int(overrides.get('trend_window', os.getenv('TREND_WINDOW', 10))),
            analysis_delay_seconds=float(overrides.get('analysis_delay_seconds', os.getenv('ANALYSIS_DELAY_SECONDS', 0))),
            timezone=overrides.get('timezone', os.getenv('TIMEZONE', 'Europe/Moscow'))
        )

        # Речь
        self.speech = SpeechConfig(
            language=overrides.get('speech_language', os.getenv('SPEECH_LANGUAGE', 'ru-RU')),
            listen_timeout=int(overrides.get('listen_timeout', os.getenv('SPEECH_LISTEN_TIMEOUT', 10))),
            phrase_time_limit=int(overrides.get('phrase_time_limit', os.getenv('SPEECH_PHRASE_TIME_LIMIT', 30)))
        )

        # Логирование
        self.log_level = LogLevel(overrides.get('log_level', os.getenv('LOG_LEVEL', 'INFO')))
        self.log_to_file = str(overrides.get('log_to_file', os.getenv('LOG_TO_FILE', 'false'))).lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.analysis.trend_window < 1:
            errors.append(f"TREND_WINDOW должен быть положительным, получено {self.analysis.trend_window}")

        if self.analysis.analysis_delay_seconds < 0:
            errors.append("ANALYSIS_DELAY_SECONDS не может быть отрицательным")

        if self.storage.max_backups < 0:
            errors.append("MAX_BACKUPS не может быть отрицательным")

        if self.speech.listen_timeout < 1 or self.speech.phrase_time_limit < 1:
            errors.append("SPEECH_LISTEN_TIMEOUT и SPEECH_PHRASE_TIME_LIMIT должны быть положительными")

        try:
            pytz.timezone(self.analysis.timezone)
        except pytz.UnknownTimeZoneError:
            errors.append(f"Неизвестный часовой пояс: {self.analysis.timezone}")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def _ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.backup_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def tz(self):
        """Часовой пояс для отметок времени и подписей графика"""
        return pytz.timezone(self.analysis.timezone)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'uvicorn.access': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'urllib3': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"mood_diary_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'storage_path': str(self.storage.path),
            'backup_dir': str(self.storage.backup_dir),
            'trend_window': self.analysis.trend_window,
            'timezone': self.analysis.timezone,
            'speech_language': self.speech.language,
            'log_level': self.log_level.value
        }

@lru_cache
def get_config() -> DiaryConfig:
    """Глобальный экземпляр конфигурации"""
    config = DiaryConfig()
    logging.getLogger(__name__).debug(f"Configuration loaded: {config.to_dict()}")
    return config

__all__ = [
    'DiaryConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'AnalysisConfig',
    'SpeechConfig',
    'get_config'
]
