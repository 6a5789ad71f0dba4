import io
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from mood_diary.core.classifier import ClassificationResult
from mood_diary.services.capture import AudioFileCapture
from mood_diary.services.diary_service import DiaryService
from ..config import DashboardSettings, get_settings
from ..dependencies import get_diary_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

class AnalyzeRequest(BaseModel):
    # пустой текст пропускаем до сервиса: он ответит уведомлением
    text: str = ""

class InputModeRequest(BaseModel):
    use_text_input: bool

def analysis_payload(service: DiaryService, text: str, result: ClassificationResult) -> Dict[str, Any]:
    return {
        "text": text,
        "emotion": result.emotion.value,
        "emoji": result.emotion.emoji,
        "label": result.emotion.label,
        "advice": result.advice,
        "utterance": service.utterance_for(result).to_dict()
    }

@router.post("/api/analysis", response_model=Dict[str, Any])
async def analyze_text(
    req: AnalyzeRequest,
    service: DiaryService = Depends(get_diary_service)
):
    """
    Определить эмоцию введённого текста
    """
    result = await service.analyze_async(req.text)
    return analysis_payload(service, req.text, result)

@router.post("/api/capture", response_model=Dict[str, Any])
async def analyze_recording(
    audio: UploadFile = File(...),
    service: DiaryService = Depends(get_diary_service),
    settings: DashboardSettings = Depends(get_settings)
):
    """
    Распознать загруженную запись голоса и определить эмоцию
    """
    data = await audio.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Запись слишком большая")

    logger.info(f"🎙️ Получена запись: {audio.filename} ({len(data)} байт)")
    adapter = AudioFileCapture(io.BytesIO(data), language=service.config.speech.language)
    transcript = await run_in_threadpool(service.record, adapter)
    result = await service.analyze_async(transcript)
    return analysis_payload(service, transcript, result)

@router.get("/api/analysis/state", response_model=Dict[str, Any])
async def get_record_state(service: DiaryService = Depends(get_diary_service)):
    """
    Текущее состояние экрана записи
    """
    state = service.state
    return {
        "recognized_text": state.recognized_text,
        "emotion": state.result.emotion.value if state.result else None,
        "use_text_input": state.use_text_input,
        "is_analyzing": state.is_analyzing,
        "is_recording": service.is_recording
    }

@router.put("/api/analysis/input-mode", response_model=Dict[str, Any])
async def set_input_mode(
    req: InputModeRequest,
    service: DiaryService = Depends(get_diary_service)
):
    service.set_text_input(req.use_text_input)
    return {"use_text_input": service.state.use_text_input}
