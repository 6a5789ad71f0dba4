"""
Озвучка советов (text-to-speech).

Озвучка - по принципу "запустил и забыл": speak() возвращается сразу,
ошибки синтеза только логируются.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, Future
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Utterance:
    """Фраза с параметрами голоса"""
    text: str
    lang: str = "ru-RU"
    rate: float = 0.9
    pitch: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

class PlaybackAdapter(ABC):

    @abstractmethod
    def speak(self, utterance: Utterance) -> None:
        ...

    def close(self) -> None:
        pass

class NullPlayback(PlaybackAdapter):
    """Озвучка не поддерживается: молча пропускаем"""

    def speak(self, utterance: Utterance) -> None:
        logger.debug(f"Playback unavailable, skipped {len(utterance.text)} chars")

class ThreadedPlayback(PlaybackAdapter):
    """Синтез в отдельном потоке через переданную функцию"""

    def __init__(self, speak_fn: Callable[[Utterance], None], max_workers: int = 1):
        self.speak_fn = speak_fn
        self.executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="playback")
        self.last_future: Optional[Future] = None

    def speak(self, utterance: Utterance) -> None:
        try:
            future = self.executor.submit(self.speak_fn, utterance)
        except RuntimeError as e:
            # пул уже закрыт
            logger.warning(f"Playback skipped: {e}")
            return
        future.add_done_callback(self._log_failure)
        self.last_future = future

    @staticmethod
    def _log_failure(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.warning(f"Playback failed: {error}")

    def close(self) -> None:
        self.executor.shutdown(wait=False)

__all__ = [
    'Utterance',
    'PlaybackAdapter',
    'NullPlayback',
    'ThreadedPlayback'
]
