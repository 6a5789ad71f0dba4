#!/usr/bin/env python3
"""
Charts API для AI-Дневника Настроения
Данные графика настроения по последним записям
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from mood_diary.core.trends import build_trend_chart, trend_series
from mood_diary.services.diary_service import DiaryService
from ..dependencies import get_diary_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charts", tags=["charts"])

@router.get("/mood-trend", response_model=Dict[str, Any])
async def get_mood_trend_chart(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Количество последних записей"),
    service: DiaryService = Depends(get_diary_service)
):
    """
    Линейный график настроения: значения 1 / 0 / -1 в хронологическом порядке
    """
    if limit is None:
        points = service.trend()
    else:
        points = trend_series(service.database, limit, service.config.tz)

    logger.debug(f"📈 Точек на графике: {len(points)}")
    return build_trend_chart(points)
