#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mood Diary - Exceptions
Иерархия ошибок дневника: ввод, запись голоса, хранилище
"""

from enum import Enum
from typing import Optional

class MoodDiaryError(Exception):
    """Базовое исключение дневника"""
    pass

# ===== CAPTURE =====

class FailureKind(Enum):
    """Виды отказа голосового ввода"""
    UNSUPPORTED = "unsupported"
    PERMISSION_DENIED = "permission-denied"
    NO_SPEECH = "no-speech-detected"
    FAILED = "failed"

class CaptureError(MoodDiaryError):
    """Голосовой ввод не дал текста"""
    kind: FailureKind = FailureKind.FAILED

    def __init__(self, message: str = "", cause: Optional[BaseException] = None):
        super().__init__(message or self.kind.value)
        self.cause = cause

class CaptureUnsupported(CaptureError):
    """Платформа не поддерживает запись речи"""
    kind = FailureKind.UNSUPPORTED

class CapturePermissionDenied(CaptureError):
    """Пользователь не дал доступ к микрофону"""
    kind = FailureKind.PERMISSION_DENIED

class CaptureFailed(CaptureError):
    """Распознавание не дало пригодного результата"""

    def __init__(self, message: str = "", cause: Optional[BaseException] = None,
                 kind: FailureKind = FailureKind.FAILED):
        self.kind = kind
        super().__init__(message, cause)

    @property
    def reason(self) -> str:
        return self.kind.value

class CaptureSessionError(CaptureError):
    """Повторный запуск уже использованной или активной сессии записи"""

# ===== VALIDATION =====

class ValidationError(MoodDiaryError):
    """Ошибка валидации данных"""
    pass

class EmptyInputError(ValidationError):
    """Пустой или состоящий из пробелов текст"""
    pass

class SaveWithoutClassificationError(ValidationError):
    """Попытка сохранить запись до анализа эмоции"""
    pass

# ===== STORAGE =====

class StorageError(MoodDiaryError):
    """Базовое исключение для ошибок хранилища"""
    pass

class StorageWriteError(StorageError):
    """Не удалось записать данные на диск"""
    pass

class StorageCorruptionError(StorageError):
    """Ошибка повреждения данных"""
    pass

__all__ = [
    'MoodDiaryError',
    'FailureKind',
    'CaptureError',
    'CaptureUnsupported',
    'CapturePermissionDenied',
    'CaptureFailed',
    'CaptureSessionError',
    'ValidationError',
    'EmptyInputError',
    'SaveWithoutClassificationError',
    'StorageError',
    'StorageWriteError',
    'StorageCorruptionError'
]
