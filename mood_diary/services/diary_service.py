"""
Сервис дневника: запись мысли, анализ эмоции, сохранение.

Держит состояние экрана записи: распознанный текст, результат анализа и
режим ввода (голос или текст).
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from mood_diary.config import DiaryConfig
from mood_diary.core.classifier import ClassificationResult, classify
from mood_diary.core.database import DiaryDatabase
from mood_diary.core.exceptions import (
    CaptureUnsupported,
    CapturePermissionDenied,
    SaveWithoutClassificationError
)
from mood_diary.core.models import DiaryEntry, validate_text
from mood_diary.core.trends import TrendPoint, trend_series
from mood_diary.services.capture import CaptureAdapter, CaptureSession, MicrophoneCapture
from mood_diary.services.playback import PlaybackAdapter, NullPlayback, Utterance

logger = logging.getLogger(__name__)

@dataclass
class RecordState:
    """Состояние экрана записи"""
    recognized_text: str = ""
    result: Optional[ClassificationResult] = None
    use_text_input: bool = False
    is_analyzing: bool = False

class DiaryService:
    """Сценарии дневника поверх классификатора и хранилища"""

    def __init__(self, database: DiaryDatabase, config: DiaryConfig,
                 playback: Optional[PlaybackAdapter] = None):
        self.database = database
        self.config = config
        self.playback = playback or NullPlayback()
        self.state = RecordState()
        self._capture_session: Optional[CaptureSession] = None
        self._analysis_seq = 0

    # ===== АНАЛИЗ =====

    def _next_analysis(self, text: str) -> int:
        # более поздний анализ вытесняет результат более раннего
        self._analysis_seq += 1
        self.state.recognized_text = text
        self.state.result = None
        return self._analysis_seq

    def analyze(self, text: str) -> ClassificationResult:
        """Проверить текст, определить эмоцию и озвучить совет"""
        text = validate_text(text)

        token = self._next_analysis(text)
        result = classify(text)
        self._publish(token, text, result)
        return result

    async def analyze_async(self, text: str) -> ClassificationResult:
        """То же, что analyze, с настраиваемой паузой перед результатом"""
        text = validate_text(text)

        token = self._next_analysis(text)
        self.state.is_analyzing = True
        try:
            result = classify(text)
            delay = self.config.analysis.analysis_delay_seconds
            if delay:
                await asyncio.sleep(delay)
        finally:
            if token == self._analysis_seq:
                self.state.is_analyzing = False

        self._publish(token, text, result)
        return result

    def _publish(self, token: int, text: str, result: ClassificationResult) -> None:
        if token != self._analysis_seq:
            logger.debug(f"Stale analysis #{token} dropped, latest is #{self._analysis_seq}")
            return
        # текст и результат всегда от одного и того же анализа
        self.state.recognized_text = text
        self.state.result = result
        logger.info(f"Text analyzed: {result.emotion.value}")
        self.playback.speak(self.utterance_for(result))

    def utterance_for(self, result: ClassificationResult) -> Utterance:
        speech = self.config.speech
        return Utterance(
            text=result.advice,
            lang=speech.language,
            rate=speech.voice_rate,
            pitch=speech.voice_pitch
        )

    # ===== ГОЛОСОВОЙ ВВОД =====

    def microphone_capture(self) -> MicrophoneCapture:
        """Адаптер микрофона с параметрами из конфигурации"""
        speech = self.config.speech
        return MicrophoneCapture(
            language=speech.language,
            timeout=speech.listen_timeout,
            phrase_time_limit=speech.phrase_time_limit
        )

    def record(self, adapter: Optional[CaptureAdapter] = None) -> str:
        """Одна сессия записи; по умолчанию с микрофона"""
        session = CaptureSession(adapter or self.microphone_capture())
        self._capture_session = session
        try:
            return session.run()
        except (CaptureUnsupported, CapturePermissionDenied):
            # без голоса остаётся текстовый ввод
            self.state.use_text_input = True
            raise

    def capture(self, adapter: Optional[CaptureAdapter] = None) -> ClassificationResult:
        """Запись, затем анализ распознанного текста"""
        return self.analyze(self.record(adapter))

    @property
    def is_recording(self) -> bool:
        return bool(self._capture_session and self._capture_session.is_recording)

    def set_text_input(self, enabled: bool) -> None:
        self.state.use_text_input = enabled

    # ===== ЗАПИСИ =====

    def save(self) -> DiaryEntry:
        """Сохранить проанализированный текст в дневник"""
        result = self.state.result
        if not self.state.recognized_text or result is None:
            raise SaveWithoutClassificationError("Текст ещё не проанализирован")

        entry = self.database.append(self.state.recognized_text, result.emotion, result.advice)
        self.reset()
        return entry

    def delete(self, entry_id: str) -> bool:
        return self.database.delete(entry_id)

    def entries(self) -> List[DiaryEntry]:
        return self.database.list()

    def trend(self) -> List[TrendPoint]:
        return trend_series(self.database, self.config.analysis.trend_window, self.config.tz)

    def reset(self) -> None:
        """Очистить текст и результат, режим ввода сохраняется"""
        self.state.recognized_text = ""
        self.state.result = None
        self.state.is_analyzing = False

    def close(self) -> None:
        self.playback.close()

__all__ = [
    'RecordState',
    'DiaryService'
]
