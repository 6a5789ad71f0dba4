"""
Сервисы дневника: сценарий записи, голосовой ввод, озвучка, уведомления
"""

from .diary_service import DiaryService, RecordState
from .capture import CaptureAdapter, MicrophoneCapture, AudioFileCapture, CaptureSession
from .playback import Utterance, PlaybackAdapter, NullPlayback, ThreadedPlayback
from .notifications import Notification, Variant, notification_for

__all__ = [
    'DiaryService',
    'RecordState',
    'CaptureAdapter',
    'MicrophoneCapture',
    'AudioFileCapture',
    'CaptureSession',
    'Utterance',
    'PlaybackAdapter',
    'NullPlayback',
    'ThreadedPlayback',
    'Notification',
    'Variant',
    'notification_for'
]
