import pytest

import mood_diary.__main__ as launcher
from mood_diary.dashboard.config import DashboardSettings

@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(launcher.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls

def test_debug_setting_applies_without_flag(monkeypatch, uvicorn_calls):
    monkeypatch.setattr(launcher, "get_settings", lambda: DashboardSettings(DEBUG=True))

    launcher.main([])

    app, kwargs = uvicorn_calls[0]
    assert app == "mood_diary.dashboard.app:create_app"
    assert kwargs["factory"] is True
    assert kwargs["log_level"] == "debug"
    assert kwargs["reload"] is True

def test_production_defaults(monkeypatch, uvicorn_calls):
    monkeypatch.setattr(launcher, "get_settings", lambda: DashboardSettings(DEBUG=False))

    launcher.main(["--port", "9000"])

    _, kwargs = uvicorn_calls[0]
    assert kwargs["port"] == 9000
    assert kwargs["log_level"] == "info"
    assert kwargs["reload"] is False

def test_dev_flag_overrides_settings(monkeypatch, uvicorn_calls):
    monkeypatch.setattr(launcher, "get_settings", lambda: DashboardSettings(DEBUG=False))

    launcher.main(["--dev"])

    assert uvicorn_calls[0][1]["log_level"] == "debug"
