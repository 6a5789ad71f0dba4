import asyncio

import pytest
import speech_recognition as sr

from mood_diary.config import DiaryConfig
from mood_diary.core.exceptions import (
    CaptureFailed,
    CapturePermissionDenied,
    CaptureUnsupported,
    EmptyInputError,
    SaveWithoutClassificationError,
    StorageWriteError
)
from mood_diary.core.models import Emotion
from mood_diary.services.diary_service import DiaryService
from mood_diary.services.notifications import (
    CAPTURE_FAILED,
    EMPTY_INPUT,
    PERMISSION_DENIED,
    STORAGE_FAILED,
    notification_for
)

from conftest import FakeAdapter

@pytest.fixture
def service(empty_database, diary_config, playback):
    return DiaryService(empty_database, diary_config, playback)

def test_analyze_sets_result_and_speaks(service, playback):
    result = service.analyze("Сегодня был отличный день!")

    assert result.emotion is Emotion.POSITIVE
    assert service.state.result == result
    assert service.state.recognized_text == "Сегодня был отличный день!"
    assert [u.text for u in playback.spoken] == [Emotion.POSITIVE.advice]
    assert playback.spoken[0].rate == 0.9

def test_empty_input_changes_nothing(service, playback):
    service.analyze("Мне грустно")
    before = (service.state.recognized_text, service.state.result)

    with pytest.raises(EmptyInputError):
        service.analyze("   ")

    assert (service.state.recognized_text, service.state.result) == before
    assert len(playback.spoken) == 1

def test_analyze_async(service):
    result = asyncio.run(service.analyze_async("Я устал сегодня, было тяжело."))
    assert result.emotion is Emotion.NEGATIVE
    assert not service.state.is_analyzing

def test_analyze_async_waits_configured_delay(tmp_path, empty_database, monkeypatch):
    config = DiaryConfig(data_dir=tmp_path / "d", log_dir=tmp_path / "l", analysis_delay_seconds=0.8)
    service = DiaryService(empty_database, config)
    delays = []

    async def fake_sleep(seconds):
        assert service.state.is_analyzing
        delays.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    asyncio.run(service.analyze_async("обычный день"))
    assert delays == [0.8]

def test_save_appends_and_resets(service, empty_database):
    service.analyze("Люблю выходные")
    entry = service.save()

    assert empty_database.list() == [entry]
    assert entry.emotion is Emotion.POSITIVE
    assert entry.advice == Emotion.POSITIVE.advice
    assert service.state.recognized_text == ""
    assert service.state.result is None

def test_save_without_analysis_is_rejected(service, empty_database):
    with pytest.raises(SaveWithoutClassificationError):
        service.save()
    assert empty_database.count() == 0

def test_storage_failure_keeps_pending_text(service, empty_database, monkeypatch):
    service.analyze("Было хорошо")

    def broken_set(key, value):
        raise StorageWriteError("disk full")

    monkeypatch.setattr(empty_database.storage, "set", broken_set)
    with pytest.raises(StorageWriteError) as info:
        service.save()

    assert notification_for(info.value) == STORAGE_FAILED
    assert service.state.recognized_text == "Было хорошо"
    assert empty_database.count() == 0

def test_capture_then_analyze(service):
    result = service.capture(FakeAdapter("мне страшно"))
    assert result.emotion is Emotion.NEGATIVE
    assert service.state.recognized_text == "мне страшно"
    assert not service.is_recording

@pytest.mark.parametrize("error", [CaptureUnsupported(), CapturePermissionDenied()])
def test_capture_unavailable_switches_to_text(service, error):
    with pytest.raises(type(error)):
        service.capture(FakeAdapter(error=error))
    assert service.state.use_text_input

def test_capture_failure_keeps_mode(service):
    with pytest.raises(CaptureFailed) as info:
        service.capture(FakeAdapter(error=CaptureFailed("шум")))
    assert not service.state.use_text_input
    assert service.state.result is None
    assert notification_for(info.value) == CAPTURE_FAILED

def test_trend_uses_configured_window(service):
    for text in ("хорошо", "обычно", "плохо"):
        service.analyze(text)
        service.save()
    assert [p.value for p in service.trend()] == [1, 0, -1]

def test_delete(service):
    service.analyze("тяжело")
    entry = service.save()
    assert service.delete(entry.id)
    assert service.entries() == []

def test_close_closes_playback(service, playback):
    service.close()
    assert playback.closed

def test_notifications_for_errors():
    assert notification_for(EmptyInputError()) == EMPTY_INPUT
    assert notification_for(CapturePermissionDenied()) == PERMISSION_DENIED
    assert EMPTY_INPUT.to_dict()["variant"] == "destructive"

def test_overlapping_analyses_keep_text_and_emotion_together(tmp_path, empty_database, playback):
    config = DiaryConfig(data_dir=tmp_path / "d", log_dir=tmp_path / "l", analysis_delay_seconds=0.05)
    service = DiaryService(empty_database, config, playback)
    seen_after_first = []

    async def first():
        result = await service.analyze_async("мне так хорошо")
        seen_after_first.append((service.state.recognized_text, service.state.result))
        return result

    async def second():
        await asyncio.sleep(0.01)
        return await service.analyze_async("мне плохо")

    async def overlap():
        return await asyncio.gather(first(), second())

    a, b = asyncio.run(overlap())

    assert a.emotion is Emotion.POSITIVE
    assert b.emotion is Emotion.NEGATIVE
    # устаревший результат не попадает рядом с чужим текстом
    assert seen_after_first == [("мне плохо", None)]
    assert (service.state.recognized_text, service.state.result) == ("мне плохо", b)
    assert not service.state.is_analyzing
    assert [u.text for u in playback.spoken] == [Emotion.NEGATIVE.advice]

    entry = service.save()
    assert (entry.text, entry.emotion) == ("мне плохо", Emotion.NEGATIVE)

def test_long_text_is_analyzed(service):
    text = "хорошо " * 1000
    result = service.analyze(text)

    assert result.emotion is Emotion.POSITIVE
    assert service.state.recognized_text == text
    assert service.save().text == text

def test_microphone_uses_configured_limits(tmp_path, empty_database):
    config = DiaryConfig(
        data_dir=tmp_path / "d", log_dir=tmp_path / "l",
        listen_timeout=5, phrase_time_limit=12, speech_language="en-US"
    )
    microphone = DiaryService(empty_database, config).microphone_capture()

    assert microphone.timeout == 5
    assert microphone.phrase_time_limit == 12
    assert microphone.language == "en-US"

def test_capture_defaults_to_microphone(service, monkeypatch):
    def no_pyaudio():
        raise AttributeError("Could not find PyAudio")

    monkeypatch.setattr(sr, "Microphone", no_pyaudio)
    with pytest.raises(CaptureUnsupported):
        service.capture()
    assert service.state.use_text_input

def test_invalid_speech_limits_rejected(tmp_path):
    with pytest.raises(ValueError):
        DiaryConfig(data_dir=tmp_path / "d", log_dir=tmp_path / "l", listen_timeout=0)
