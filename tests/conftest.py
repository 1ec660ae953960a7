# tests/conftest.py

import json
from types import SimpleNamespace

import pytest

from cofrade.core.config import Settings

SAMPLE_PLAN = {
    "city": "Sevilla",
    "day": "Jueves Santo",
    "plan_title": "Recogimiento en el Jueves Santo",
    "itinerary": [
        {
            "hour": "16:30",
            "brotherhood": "Los Negritos",
            "location": "Calle Recaredo",
            "vibe_reason": "Salida íntima, sin bulla.",
        },
        {
            "hour": "20:00",
            "brotherhood": "La Exaltación",
            "location": "Plaza de Santa Catalina",
            "vibe_reason": "Cornetas y tambores en una plaza recogida.",
            "details": "Llega media hora antes.",
        },
    ],
    "extra_tips": "Lleva agua y calzado cómodo.",
}


class FakeModels:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeClient:
    """Stands in for google.genai.Client: only models.generate_content is used."""

    def __init__(self, response):
        self.models = FakeModels(response)


def make_response(text, chunks=None):
    metadata = SimpleNamespace(grounding_chunks=chunks)
    candidate = SimpleNamespace(grounding_metadata=metadata)
    return SimpleNamespace(text=text, candidates=[candidate])


def web_chunk(uri, title=""):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))


@pytest.fixture
def sample_text():
    return json.dumps(SAMPLE_PLAN, ensure_ascii=False)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", model="gemini-test")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY", "GEMINI_MODEL", "COFRADE_PROXY_URL",
                 "COFRADE_TIMEOUT", "COFRADE_DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
