"""
Уведомления для пользователя (всплывающие сообщения интерфейса)
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict

from mood_diary.core.exceptions import (
    MoodDiaryError,
    CaptureUnsupported,
    CapturePermissionDenied,
    CaptureError,
    EmptyInputError,
    SaveWithoutClassificationError,
    StorageError
)

logger = logging.getLogger(__name__)

class Variant(Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"

@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["variant"] = self.variant.value
        return data

CAPTURE_UNSUPPORTED = Notification(
    "Ошибка",
    "Голосовой ввод не поддерживается в этом браузере",
    Variant.DESTRUCTIVE
)
PERMISSION_DENIED = Notification(
    "Нет доступа к микрофону",
    "Разрешите доступ к микрофону в настройках браузера или используйте текстовый ввод",
    Variant.DESTRUCTIVE
)
CAPTURE_FAILED = Notification(
    "Ошибка записи",
    "Не удалось распознать речь. Попробуйте еще раз.",
    Variant.DESTRUCTIVE
)
EMPTY_INPUT = Notification(
    "Пустой текст",
    "Напиши что-нибудь, чтобы я мог проанализировать твоё настроение",
    Variant.DESTRUCTIVE
)
SAVE_WITHOUT_CLASSIFICATION = Notification(
    "Ошибка",
    "Сначала запишите текст и дождитесь анализа эмоции",
    Variant.DESTRUCTIVE
)
STORAGE_FAILED = Notification(
    "Ошибка сохранения",
    "Не удалось сохранить дневник. Попробуйте еще раз.",
    Variant.DESTRUCTIVE
)
GENERIC_ERROR = Notification(
    "Ошибка",
    "Что-то пошло не так. Попробуйте еще раз.",
    Variant.DESTRUCTIVE
)
SAVED = Notification("Сохранено!", "Запись добавлена в твой дневник")
DELETED = Notification("Удалено", "Запись удалена из дневника")

def notification_for(error: MoodDiaryError) -> Notification:
    """Преобразовать ошибку в сообщение для пользователя"""
    # порядок важен: частные случаи CaptureError раньше общего
    if isinstance(error, CaptureUnsupported):
        notification = CAPTURE_UNSUPPORTED
    elif isinstance(error, CapturePermissionDenied):
        notification = PERMISSION_DENIED
    elif isinstance(error, CaptureError):
        notification = CAPTURE_FAILED
    elif isinstance(error, EmptyInputError):
        notification = EMPTY_INPUT
    elif isinstance(error, SaveWithoutClassificationError):
        notification = SAVE_WITHOUT_CLASSIFICATION
    elif isinstance(error, StorageError):
        notification = STORAGE_FAILED
    else:
        notification = GENERIC_ERROR

    logger.info(f"🔔 {type(error).__name__}: {notification.title}")
    return notification
