# tests/test_config.py

from cofrade.core.config import DEFAULT_MODEL, DEFAULT_TIMEOUT, load_settings


def test_defaults(clean_env):
    s = load_settings()
    assert s.api_key is None
    assert s.model == DEFAULT_MODEL
    assert s.timeout == DEFAULT_TIMEOUT
    assert not s.debug
    assert not s.proxy_mode
    assert s.log_level == "INFO"


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("COFRADE_PROXY_URL", "http://localhost:8000/api/generateItinerary")
    monkeypatch.setenv("COFRADE_TIMEOUT", "30")
    monkeypatch.setenv("COFRADE_DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = load_settings()
    assert s.api_key == "abc"
    assert s.model == "gemini-2.5-flash"
    assert s.proxy_mode
    assert s.timeout == 30.0
    assert s.debug
    assert s.log_level == "DEBUG"


def test_api_key_fallback_and_bad_timeout(clean_env, monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy")
    monkeypatch.setenv("COFRADE_TIMEOUT", "soon")
    s = load_settings()
    assert s.api_key == "legacy"
    assert s.timeout == DEFAULT_TIMEOUT
