from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mood_diary.core.preferences import PreferencesStore, Theme
from ..dependencies import get_preferences

router = APIRouter(prefix="/api/settings", tags=["settings"])

class ThemeRequest(BaseModel):
    theme: Theme

@router.get("/theme", response_model=Dict[str, Any])
async def get_theme(preferences: PreferencesStore = Depends(get_preferences)):
    return {"theme": preferences.get_theme().value}

@router.put("/theme", response_model=Dict[str, Any])
async def set_theme(
    req: ThemeRequest,
    preferences: PreferencesStore = Depends(get_preferences)
):
    return {"theme": preferences.set_theme(req.theme).value}

@router.post("/theme/toggle", response_model=Dict[str, Any])
async def toggle_theme(preferences: PreferencesStore = Depends(get_preferences)):
    """
    Переключить светлую/тёмную тему
    """
    return {"theme": preferences.toggle_theme().value}
