#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AI-Дневник Настроения - точка входа

Запуск: python -m mood_diary [--host HOST] [--port PORT] [--dev]
"""

import argparse
import logging
from typing import List, Optional

import uvicorn

from mood_diary.dashboard.config import get_settings

logger = logging.getLogger(__name__)

def run_app(host: Optional[str] = None, port: Optional[int] = None,
            dev: Optional[bool] = None, reload: Optional[bool] = None) -> None:
    """Запуск веб-приложения"""
    settings = get_settings()
    host = host or settings.DASHBOARD_HOST
    port = port or settings.DASHBOARD_PORT
    dev = dev if dev is not None else settings.DEBUG
    reload = reload if reload is not None else dev

    logger.info(f"🌐 Запуск дневника на http://{host}:{port}")

    try:
        uvicorn.run(
            "mood_diary.dashboard.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if dev else "info",
            access_log=dev,
            server_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Дневник остановлен")

def main(argv: Optional[List[str]] = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description='Запуск AI-Дневника Настроения')
    parser.add_argument('--host', default=settings.DASHBOARD_HOST, help='Host для запуска')
    parser.add_argument('--port', type=int, default=settings.DASHBOARD_PORT, help='Port для запуска')
    parser.add_argument('--dev', action='store_true', help='Режим разработки')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка')
    args = parser.parse_args(argv)

    run_app(host=args.host, port=args.port, dev=args.dev or None, reload=args.reload or None)

if __name__ == "__main__":
    main()
