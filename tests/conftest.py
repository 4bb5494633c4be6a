"""
Pytest configuration and fixtures for the OdiaAI translator.
"""

import asyncio
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from odiai.languages import Language
from odiai.utils.history import HistoryStore, TranslationRecord
from odiai.utils.storage import JsonFileStorage
from odiai.utils.translation import TranslationResult


class FakeTranslator:
    """Stands in for TranslationClient; records every call."""

    def __init__(self, translations=None, delays=None, error=None, detected=Language.HINDI):
        self.translations = translations or {}
        self.delays = delays or {}
        self.error = error
        self.detected = detected
        self.calls = []

    async def translate(self, text, source_language=Language.AUTO):
        self.calls.append((text, source_language))
        await asyncio.sleep(self.delays.get(text, 0))
        if self.error:
            raise self.error
        return self.translations.get(text, f"odia:{text}")

    async def translate_result(self, text, source_language=Language.AUTO):
        if not text.strip():
            return TranslationResult(text="", status="empty")
        return TranslationResult(text=await self.translate(text, source_language), status="ok")

    async def detect_language(self, text):
        return self.detected


class FakeCompletions:
    def __init__(self, content=None, error=None, response=None):
        self.content = content
        self.error = error
        self.response = response
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        if self.response is not None:
            return self.response
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))]
        )


class FakeOpenAI:
    """Minimal AsyncOpenAI look-alike exposing chat.completions.create."""

    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


def make_record(source_text, translated_text=None, language=Language.ENGLISH):
    return TranslationRecord.create(source_text, translated_text or f"odia:{source_text}", language)


@pytest.fixture
def history_path(tmp_path):
    return str(tmp_path / "history.json")


@pytest.fixture
def history(history_path):
    return HistoryStore(JsonFileStorage(history_path))


@pytest.fixture
def fake_translator():
    return FakeTranslator()


@pytest.fixture
def client(history_path, monkeypatch, fake_translator):
    """Test client with isolated history file and a fake translator."""
    monkeypatch.setenv("ODIAI_HISTORY_PATH", history_path)
    from odiai.main import app

    with TestClient(app) as test_client:
        app.state.translator = fake_translator
        app.state.debounce_seconds = 0.01
        yield test_client
