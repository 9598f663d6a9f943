from __future__ import annotations

import time
from typing import Any

from wordvault.errors import DictionaryNotFoundError, PersistenceError
from wordvault.models.item_models import Meaning
from wordvault.services.providers.dictionary_client import DictionaryEntry


class FakeDictionary:
    def __init__(self, entries: dict[str, DictionaryEntry] | None = None, error: Exception | None = None):
        self.entries = entries or {}
        self.error = error
        self.calls: list[str] = []

    def lookup(self, word: str) -> DictionaryEntry:
        self.calls.append(word)
        if self.error is not None:
            raise self.error
        entry = self.entries.get(word.strip().lower())
        if entry is None:
            raise DictionaryNotFoundError(word)
        return entry.model_copy(deep=True)


class FakeTextGenerator:
    def __init__(self, reply: str = "A lovely little word.", error: Exception | None = None, delay: float = 0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class FakePersistence:
    """Dict-backed persistence that can be told to fail writes."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, dict[str, Any]]] = {}
        self.fail_upserts = False
        self.fail_deletes = False
        self.fail_texts: set[str] = set()

    def upsert(self, collection: str, doc: dict[str, Any]) -> None:
        if self.fail_upserts or doc.get("text") in self.fail_texts:
            raise PersistenceError("disk full")
        self.docs.setdefault(collection, {})[doc["_id"]] = dict(doc)

    def delete(self, collection: str, doc_id: str) -> None:
        if self.fail_deletes:
            raise PersistenceError("disk full")
        self.docs.get(collection, {}).pop(doc_id, None)

    def load(self, collection: str) -> list[dict[str, Any]]:
        return [dict(doc) for doc in self.docs.get(collection, {}).values()]


def entry(*definitions: str, audio_url: str | None = None, example: str | None = None) -> DictionaryEntry:
    return DictionaryEntry(
        meanings=[
            Meaning(part_of_speech="noun", definition=definition, example=example) for definition in definitions
        ],
        audio_url=audio_url,
    )
