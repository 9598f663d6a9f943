from __future__ import annotations

import pytest

from wordvault.services.journal.item_service import ItemService
from wordvault.services.journal.store import EntityStore
from wordvault.services.providers.audio_cache import AudioCache
from wordvault.state import AppState, assemble_state
from wordvault.tests.fakes import FakeDictionary, FakeTextGenerator, entry


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def service(store: EntityStore) -> ItemService:
    return ItemService(store)


@pytest.fixture
def dictionary() -> FakeDictionary:
    return FakeDictionary(
        {
            "ephemeral": entry("lasting a very short time", audio_url="https://audio.example/ephemeral.mp3"),
            "serendipity": entry("a happy accident", example="Meeting her was pure serendipity."),
        }
    )


@pytest.fixture
def text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def app_state(tmp_path, store, dictionary, text_generator) -> AppState:
    audio = AudioCache(lambda url: b"ID3-audio", directory=tmp_path / "audio", max_bytes=1024, max_age=60)
    return assemble_state(store, dictionary, text_generator, audio, intake_timeout=2)
