from datetime import datetime, tzinfo
from typing import Optional

import pytz

MOSCOW_TZ = pytz.timezone("Europe/Moscow")

# Родительный падеж для "17 октября 2026 г."
MONTHS_GENITIVE = (
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
)

def now_in(tz: Optional[tzinfo] = None) -> datetime:
    return datetime.now(tz or MOSCOW_TZ)

def localize(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Наивное время считается локальным для tz, aware переводится в tz"""
    tz = tz or MOSCOW_TZ
    if dt.tzinfo is None:
        return tz.localize(dt) if hasattr(tz, "localize") else dt.replace(tzinfo=tz)
    return dt.astimezone(tz)

def parse_timestamp(value: str, tz: Optional[tzinfo] = None) -> datetime:
    # Браузерный JSON.stringify(Date) пишет "2025-06-10T12:00:00.000Z"
    return localize(datetime.fromisoformat(value.replace('Z', '+00:00')), tz)

def format_day_month(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    return localize(dt, tz).strftime("%d.%m")

def format_long(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    dt = localize(dt, tz)
    return f"{dt.day} {MONTHS_GENITIVE[dt.month - 1]} {dt.year} г. в {dt:%H:%M}"
