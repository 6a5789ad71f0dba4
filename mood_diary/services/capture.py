"""
Голосовой ввод: распознавание речи в текст.

Адаптер возвращает распознанный текст или бросает одну из ошибок
CaptureUnsupported / CapturePermissionDenied / CaptureFailed. Сессия
записи одноразовая: один запуск - один результат.
"""

import errno
import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Optional, Union
from pathlib import Path

import speech_recognition as sr

from mood_diary.core.exceptions import (
    FailureKind,
    CaptureError,
    CaptureUnsupported,
    CapturePermissionDenied,
    CaptureFailed,
    CaptureSessionError
)

logger = logging.getLogger(__name__)

PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM)

class CaptureAdapter(ABC):
    """Источник распознанного текста"""

    @abstractmethod
    def capture(self) -> str:
        """Записать и распознать одну фразу"""

class SpeechRecognitionCapture(CaptureAdapter):
    """Общая часть адаптеров на speech_recognition"""

    def __init__(self, language: str = "ru-RU", recognizer: Optional[sr.Recognizer] = None):
        self.language = language
        self.recognizer = recognizer or sr.Recognizer()

    @abstractmethod
    def _record(self) -> sr.AudioData:
        ...

    def capture(self) -> str:
        audio = self._record()
        return self._recognize(audio)

    def _recognize(self, audio: sr.AudioData) -> str:
        try:
            transcript = self.recognizer.recognize_google(audio, language=self.language)
        except sr.UnknownValueError as e:
            raise CaptureFailed("Речь не распознана", e, kind=FailureKind.NO_SPEECH)
        except sr.RequestError as e:
            raise CaptureFailed(f"Сервис распознавания недоступен: {e}", e)

        if not isinstance(transcript, str) or not transcript.strip():
            raise CaptureFailed("Пустой результат распознавания", kind=FailureKind.NO_SPEECH)

        logger.info(f"Speech recognized: {len(transcript)} chars")
        return transcript

class MicrophoneCapture(SpeechRecognitionCapture):
    """Одна фраза с микрофона"""

    def __init__(self, language: str = "ru-RU", recognizer: Optional[sr.Recognizer] = None,
                 timeout: Optional[int] = 10, phrase_time_limit: Optional[int] = 30):
        super().__init__(language, recognizer)
        self.timeout = timeout
        self.phrase_time_limit = phrase_time_limit

    def _open_microphone(self) -> sr.Microphone:
        try:
            return sr.Microphone()
        except AttributeError as e:
            # speech_recognition сообщает об отсутствии PyAudio через AttributeError
            raise CaptureUnsupported(f"Запись с микрофона недоступна: {e}", e)

    def _record(self) -> sr.AudioData:
        microphone = self._open_microphone()
        try:
            with microphone as source:
                self.recognizer.adjust_for_ambient_noise(source)
                logger.debug("Listening...")
                return self.recognizer.listen(
                    source,
                    timeout=self.timeout,
                    phrase_time_limit=self.phrase_time_limit
                )
        except sr.WaitTimeoutError as e:
            raise CaptureFailed("Речь не обнаружена", e, kind=FailureKind.NO_SPEECH)
        except OSError as e:
            if e.errno in PERMISSION_ERRNOS:
                raise CapturePermissionDenied(f"Нет доступа к микрофону: {e}", e)
            raise CaptureUnsupported(f"Устройство записи недоступно: {e}", e)

class AudioFileCapture(SpeechRecognitionCapture):
    """Распознавание готовой записи (WAV, AIFF или FLAC)"""

    def __init__(self, source: Union[str, Path, BinaryIO], language: str = "ru-RU",
                 recognizer: Optional[sr.Recognizer] = None):
        super().__init__(language, recognizer)
        self.source = str(source) if isinstance(source, Path) else source

    def _record(self) -> sr.AudioData:
        try:
            with sr.AudioFile(self.source) as audio_source:
                return self.recognizer.record(audio_source)
        except ValueError as e:
            raise CaptureFailed(f"Неподдерживаемый формат записи: {e}", e)
        except PermissionError as e:
            raise CapturePermissionDenied(f"Нет доступа к файлу записи: {e}", e)
        except OSError as e:
            raise CaptureFailed(f"Не удалось прочитать запись: {e}", e)

class SessionState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    DONE = "done"

class CaptureSession:
    """Одноразовая сессия записи: ровно один результат или одна ошибка"""

    def __init__(self, adapter: CaptureAdapter):
        self.adapter = adapter
        self.state = SessionState.IDLE
        self.transcript: Optional[str] = None
        self.error: Optional[CaptureError] = None
        self._lock = threading.Lock()

    @property
    def is_recording(self) -> bool:
        return self.state == SessionState.RECORDING

    def run(self) -> str:
        with self._lock:
            if self.state != SessionState.IDLE:
                raise CaptureSessionError(f"Сессия записи уже {self.state.value}")
            self.state = SessionState.RECORDING

        try:
            self.transcript = self.adapter.capture()
            return self.transcript
        except CaptureError as e:
            self.error = e
            logger.warning(f"Capture failed ({e.kind.value}): {e}")
            raise
        finally:
            self.state = SessionState.DONE

__all__ = [
    'CaptureAdapter',
    'SpeechRecognitionCapture',
    'MicrophoneCapture',
    'AudioFileCapture',
    'SessionState',
    'CaptureSession'
]
