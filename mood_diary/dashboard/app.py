#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary Web App - FastAPI Application
Локальное веб-приложение дневника: запись, анализ, история и график

Версия: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mood_diary.config import DiaryConfig, get_config
from mood_diary.core.exceptions import (
    MoodDiaryError,
    CaptureError,
    CaptureUnsupported,
    CapturePermissionDenied,
    ValidationError,
    SaveWithoutClassificationError,
    StorageError
)
from mood_diary.services.notifications import notification_for
from mood_diary.services.playback import PlaybackAdapter
from mood_diary.utils.logger import setup_logger
from .api import analysis, charts, entries, settings as settings_api
from .config import get_settings
from .dependencies import init_components

logger = logging.getLogger(__name__)

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    data: Optional[Dict[str, Any]] = None

def status_for(error: MoodDiaryError) -> int:
    """HTTP статус для ошибки дневника"""
    if isinstance(error, CaptureUnsupported):
        return 501
    if isinstance(error, CapturePermissionDenied):
        return 403
    if isinstance(error, CaptureError):
        return 422
    if isinstance(error, SaveWithoutClassificationError):
        return 409
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, StorageError):
        return 503
    return 500

def create_app(config: Optional[DiaryConfig] = None,
               playback: Optional[PlaybackAdapter] = None) -> FastAPI:
    """Собрать приложение; хранилище открывается при старте"""
    dashboard_settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        diary_config = config or get_config()
        setup_logger(diary_config)

        logger.info("🚀 Запуск AI-Дневника Настроения...")
        app.state.start_time = time.time()
        app.state.components = init_components(diary_config, playback)
        logger.info(f"📁 Файл дневника: {diary_config.storage.path}")

        yield

        logger.info("🛑 Остановка приложения...")
        app.state.components.service.close()
        logger.info("✅ Приложение остановлено")

    app = FastAPI(
        title=dashboard_settings.APP_NAME,
        version=dashboard_settings.VERSION,
        debug=dashboard_settings.DEBUG,
        lifespan=lifespan
    )

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=dashboard_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # ===== ОБРАБОТКА ОШИБОК =====

    @app.exception_handler(MoodDiaryError)
    async def diary_error_handler(request: Request, exc: MoodDiaryError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc}")
        else:
            logger.warning(f"⚠️ {request.method} {request.url.path}: {exc}")

        content: Dict[str, Any] = {
            "error": type(exc).__name__,
            "detail": str(exc),
            "notification": notification_for(exc).to_dict()
        }
        if isinstance(exc, CaptureError):
            content["kind"] = exc.kind.value
            content["use_text_input"] = request.app.state.components.service.state.use_text_input
        return JSONResponse(status_code=status_code, content=content)

    # ===== МАРШРУТЫ =====

    app.include_router(entries.router)
    app.include_router(analysis.router)
    app.include_router(charts.router)
    app.include_router(settings_api.router)
    logger.debug("✅ API роутеры подключены")

    @app.get("/health", response_model=HealthCheck)
    async def health_check(request: Request):
        """Проверка состояния приложения"""
        components = request.app.state.components
        return HealthCheck(
            status="healthy",
            service="mood-diary",
            version=dashboard_settings.VERSION,
            timestamp=time.time(),
            data={
                "entries_count": components.database.count(),
                "storage_path": str(components.config.storage.path),
                "environment": components.config.environment.value,
                "database": components.database.get_stats(),
                "uptime": time.time() - request.app.state.start_time
            }
        )

    return app

__all__ = ['create_app', 'status_for', 'HealthCheck']
