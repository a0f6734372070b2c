"""
Pytest fixtures for bookshelf tests.
"""

import pytest
from fastapi.testclient import TestClient

from bookshelf.catalog import ArticleCatalog
from bookshelf.config import state
from bookshelf.ledgers import ChatHistoryLedger, FavoritesLedger, ReadingHistoryLedger, SettingsLedger
from bookshelf.providers.base import ChatTurn, LLMProvider, LLMResponse, ProviderError
from bookshelf.server import app
from bookshelf.storage import MemoryStorage
from bookshelf.timer import ReadingTimer


SAMPLE_RECORDS = [
    {
        "id": 1,
        "title": "Bone Loss in Microgravity",
        "author": "Elena Ruiz",
        "date": "2021-03-14",
        "category": "Physiology",
        "coverColor": "#8B4513",
        "content": {
            "beginner": "Astronauts lose bone mass in space.",
            "advanced": "Osteoclast activity outpaces osteoblast activity during unloading.",
        },
        "translations": {
            "tr": {
                "title": "Mikro Yerçekiminde Kemik Kaybı",
                "author": "Elena Ruiz",
                "category": "Fizyoloji",
                "content": {
                    "beginner": "Astronotlar uzayda kemik kütlesi kaybeder.",
                },
                "summary": "Kemik yoğunluğu neden azalır?",
            }
        },
    },
    {
        "id": 2,
        "title": "Plant Growth Aboard the Station",
        "author": "Kenji Watanabe",
        "date": "2022-07-02",
        "category": "Botany",
        "coverColor": "#2E8B57",
        "content": {
            "beginner": "Roots follow water and light instead of gravity.",
            "advanced": "Auxin redistribution in root caps changes in spaceflight.",
        },
        "translations": {
            "tr": {
                "title": "İstasyonda Bitki Yetiştirme",
                "category": "Botanik",
                "content": {
                    "beginner": "Kökler yerçekimi yerine su ve ışığı takip eder.",
                    "advanced": "Uzay uçuşunda kök uçlarında oksin dağılımı değişir.",
                },
            }
        },
    },
    {
        "id": 3,
        "title": "Immune Changes in Astronauts",
        "author": "Amara Okafor",
        "date": "2020-11-20",
        "category": "Immunology",
        "coverColor": "#4169E1",
        "content": {
            "beginner": "Dormant viruses sometimes wake up during long missions.",
            "advanced": "Latent herpesviruses reactivate as T-cell proliferation drops.",
        },
    },
]


class FakeClock:
    """Manually advanced clock for timer tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeProvider(LLMProvider):
    """Provider returning canned replies and recording requests."""

    def __init__(self, reply: str = "Happy reading!", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: list[dict] = []

    @property
    def name(self) -> str:
        return "fake"

    def complete_chat(
        self,
        messages: list[ChatTurn],
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        self.calls.append({"messages": list(messages), "system_prompt": system_prompt})
        if self.fail:
            raise ProviderError("All Gemini API keys exhausted")
        return LLMResponse(text=self.reply, model="fake-model")


def make_records(count: int) -> list[dict]:
    """Generate simple untranslated records with ids 1..count."""
    return [
        {
            "id": i,
            "title": f"Article {i}",
            "author": f"Author {i % 5}",
            "date": "2024-01-01",
            "category": "General",
            "coverColor": "#000000",
            "content": {"beginner": f"Beginner text {i}", "advanced": f"Advanced text {i}"},
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def catalog():
    """Catalog built from the sample records."""
    return ArticleCatalog.from_records(SAMPLE_RECORDS)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def favorites(storage):
    return FavoritesLedger(storage)


@pytest.fixture
def history(storage):
    return ReadingHistoryLedger(storage)


@pytest.fixture
def chat_history(storage):
    return ChatHistoryLedger(storage)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(history, clock):
    return ReadingTimer(history, flush_seconds=10, clock=clock)


@pytest.fixture
def fake_provider():
    return FakeProvider()


def _install_state(catalog, storage, clock, provider):
    """Swap in isolated state; returns the originals for restoring."""
    original = {name: getattr(state, name) for name in (
        "catalog", "storage", "favorites", "history",
        "chat_history", "settings", "timer", "provider",
    )}

    state.catalog = catalog
    state.storage = storage
    state.favorites = FavoritesLedger(storage)
    state.history = ReadingHistoryLedger(storage)
    state.chat_history = ChatHistoryLedger(storage)
    state.settings = SettingsLedger(storage)
    state.timer = ReadingTimer(state.history, flush_seconds=10, tick_interval=3600, clock=clock)
    state.provider = provider
    return original


def _restore_state(original):
    for name, value in original.items():
        setattr(state, name, value)


@pytest.fixture
def client(catalog, storage, clock):
    """Test client with isolated in-memory state and chat disabled."""
    original = _install_state(catalog, storage, clock, provider=None)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    _restore_state(original)


@pytest.fixture
def chat_client(catalog, storage, clock, fake_provider):
    """Test client with a fake LLM provider configured."""
    original = _install_state(catalog, storage, clock, provider=fake_provider)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client, fake_provider

    _restore_state(original)


@pytest.fixture
def make_catalog():
    """Factory for catalogs of generated articles."""
    def _make(count: int) -> ArticleCatalog:
        return ArticleCatalog.from_records(make_records(count))
    return _make


@pytest.fixture
def failing_provider():
    return FakeProvider(fail=True)
