from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from .config import (
    AUDIO_CACHE_DIR,
    AUDIO_CACHE_MAX_AGE,
    AUDIO_CACHE_MAX_BYTES,
    DICTIONARY_FALLBACK_WORDNET,
    SHARE_INTAKE_TIMEOUT,
    WORDVAULT_STORAGE,
)
from .db import get_database
from .services.journal.enrichment import EnrichmentOrchestrator
from .services.journal.intake import SharedInbox, ShareIntake
from .services.journal.item_service import ItemService
from .services.journal.persistence import MongoPersistence
from .services.journal.practice import PracticeCoach
from .services.journal.store import EntityStore
from .services.providers.audio_cache import AudioCache
from .services.providers.dictionary_client import Dictionary, DictionaryClient, FallbackDictionary
from .services.providers.text_generation import GeminiTextGenerator, TextGenerator
from .services.providers.wordnet_dictionary import WordNetDictionary

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    store: EntityStore
    service: ItemService
    enrichment: EnrichmentOrchestrator
    intake: ShareIntake
    audio: AudioCache
    practice: PracticeCoach
    inbox: SharedInbox = field(default_factory=SharedInbox)


def assemble_state(
    store: EntityStore,
    dictionary: Dictionary,
    text_generator: TextGenerator,
    audio: AudioCache,
    intake_timeout: float = SHARE_INTAKE_TIMEOUT,
) -> AppState:
    enrichment = EnrichmentOrchestrator(store, dictionary, text_generator)
    service = ItemService(store, enrichment)
    return AppState(
        store=store,
        service=service,
        enrichment=enrichment,
        intake=ShareIntake(service, enrichment, timeout=intake_timeout),
        audio=audio,
        practice=PracticeCoach(service, text_generator),
    )


def build_state() -> AppState:
    if WORDVAULT_STORAGE == "memory":
        store = EntityStore()
    else:
        persistence = MongoPersistence(get_database())
        persistence.ensure_indexes()
        store = EntityStore(persistence)
        logger.info("Loaded %d records from MongoDB", store.load())

    client = DictionaryClient()
    dictionary: Dictionary = client
    if DICTIONARY_FALLBACK_WORDNET:
        dictionary = FallbackDictionary(client, WordNetDictionary())
    audio = AudioCache(
        client.download_audio,
        directory=AUDIO_CACHE_DIR,
        max_bytes=AUDIO_CACHE_MAX_BYTES,
        max_age=AUDIO_CACHE_MAX_AGE,
    )
    return assemble_state(store, dictionary, GeminiTextGenerator(), audio)


_state: AppState | None = None
_STATE_LOCK = threading.Lock()


def init_state(state: AppState | None = None) -> AppState:
    global _state
    with _STATE_LOCK:
        _state = state or build_state()
        return _state


def current_state() -> AppState | None:
    return _state


def get_state() -> AppState:
    global _state
    if _state is not None:
        return _state
    with _STATE_LOCK:
        if _state is None:
            _state = build_state()
        return _state


__all__ = ["AppState", "assemble_state", "build_state", "current_state", "get_state", "init_state"]
