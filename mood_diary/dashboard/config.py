#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Dashboard Configuration
Настройки локального веб-приложения дневника

Версия: 1.0.0
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class DashboardSettings(BaseSettings):
    """Настройки веб-приложения дневника"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="AI-Дневник Настроения",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия приложения"
    )

    DEBUG: bool = Field(
        default=False,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    DASHBOARD_HOST: str = Field(
        default="127.0.0.1",
        description="Хост для запуска приложения"
    )

    DASHBOARD_PORT: int = Field(
        default=8000,
        description="Порт для запуска приложения"
    )

    # ===== CORS НАСТРОЙКИ =====

    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:8000", "http://127.0.0.1:8000"],
        description="Разрешенные источники для CORS"
    )

    # ===== ЗАГРУЗКА ЗАПИСЕЙ =====

    MAX_UPLOAD_MB: int = Field(
        default=10,
        description="Максимальный размер аудиозаписи в мегабайтах"
    )

    @field_validator("DASHBOARD_PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1024 <= v <= 65535:
            raise ValueError(f"Порт {v} вне допустимого диапазона (1024-65535)")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

@lru_cache
def get_settings() -> DashboardSettings:
    return DashboardSettings()
