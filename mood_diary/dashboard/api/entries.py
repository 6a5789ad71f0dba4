from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from mood_diary.config import DiaryConfig
from mood_diary.core.models import DiaryEntry
from mood_diary.services.diary_service import DiaryService
from mood_diary.services.notifications import SAVED, DELETED
from ..dependencies import get_diary_service, get_diary_config

router = APIRouter(prefix="/api/entries", tags=["entries"])

def entry_payload(entry: DiaryEntry, config: DiaryConfig) -> Dict[str, Any]:
    data = entry.to_dict()
    data.update({
        "emoji": entry.emotion.emoji,
        "label": entry.emotion.label,
        "score": entry.score,
        "display_date": entry.display_date(config.tz)
    })
    return data

@router.get("", response_model=Dict[str, Any])
async def list_entries(
    service: DiaryService = Depends(get_diary_service),
    config: DiaryConfig = Depends(get_diary_config)
):
    """
    Все записи дневника, новые первыми
    """
    entries: List[DiaryEntry] = service.entries()
    return {
        "entries": [entry_payload(e, config) for e in entries],
        "count": len(entries),
        "description": f"Всего записей: {len(entries)}" if entries else "Пока нет записей"
    }

@router.post("", status_code=201, response_model=Dict[str, Any])
async def save_entry(
    service: DiaryService = Depends(get_diary_service),
    config: DiaryConfig = Depends(get_diary_config)
):
    """
    Добавить проанализированный текст в дневник
    """
    entry = service.save()
    return {
        "entry": entry_payload(entry, config),
        "notification": SAVED.to_dict()
    }

@router.delete("/{entry_id}", response_model=Dict[str, Any])
async def delete_entry(
    entry_id: str,
    service: DiaryService = Depends(get_diary_service)
):
    """
    Удалить запись по id; неизвестный id ничего не меняет
    """
    if not service.delete(entry_id):
        return {"deleted": None, "notification": None}
    return {
        "deleted": entry_id,
        "notification": DELETED.to_dict()
    }
