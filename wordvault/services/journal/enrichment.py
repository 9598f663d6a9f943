from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

from ...errors import DictionaryNotFoundError, PersistenceError, ProviderError
from ...models.item_models import Item, Meaning, Word
from ..providers.dictionary_client import Dictionary
from ..providers.text_generation import (
    TextGenerator,
    fetch_fun_fact,
    fetch_fun_opinion,
    generate_example,
)
from .store import EntityStore, kind_of

logger = logging.getLogger(__name__)

WORD_FIELDS = ("meanings", "audio_url", "fun_fact")
PHRASE_FIELDS = ("fun_opinion",)


class EnrichmentState(str, Enum):
    EMPTY = "empty"
    PENDING = "pending"
    POPULATED = "populated"
    FAILED = "failed"


def _fields_for(item: Item) -> tuple[str, ...]:
    return WORD_FIELDS if isinstance(item, Word) else PHRASE_FIELDS


class EnrichmentOrchestrator:
    """Runs dictionary and text-generation lookups after an item is saved.

    Jobs are detached asyncio tasks keyed by ``(kind, id)``. Network calls run
    in worker threads; results are committed back on the event loop through a
    second store write. A result is discarded when the item was deleted, or
    its text edited, while the job was in flight.
    """

    def __init__(self, store: EntityStore, dictionary: Dictionary, text_generator: TextGenerator) -> None:
        self._store = store
        self._dictionary = dictionary
        self._text = text_generator
        self._tasks: dict[tuple[str, str], asyncio.Task] = {}
        self._running: set[asyncio.Task] = set()
        self._states: dict[tuple[str, str], dict[str, EnrichmentState]] = {}

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def submit(self, item: Item) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; enrichment for %r not scheduled", item.text)
            return None
        key = (kind_of(item), item.id)
        self._set_states(key, _fields_for(item), EnrichmentState.PENDING)
        task = loop.create_task(self.enrich(item, item.text))
        self._tasks[key] = task
        self._running.add(task)
        task.add_done_callback(lambda done, key=key: self._forget(key, done))
        return task

    def _forget(self, key: tuple[str, str], task: asyncio.Task) -> None:
        self._running.discard(task)
        if self._tasks.get(key) is task:
            del self._tasks[key]

    def is_pending(self, item: Item) -> bool:
        return (kind_of(item), item.id) in self._tasks

    async def wait_for(self, item: Item, timeout: float | None = None) -> bool:
        task = self._tasks.get((kind_of(item), item.id))
        if task is None:
            return True
        _, pending = await asyncio.wait({task}, timeout=timeout)
        return not pending

    async def drain(self, timeout: float | None = None) -> bool:
        tasks = set(self._running)
        if not tasks:
            return True
        _, pending = await asyncio.wait(tasks, timeout=timeout)
        return not pending

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def state(self, kind: str, item_id: str, field: str) -> EnrichmentState:
        return self._states.get((kind, item_id), {}).get(field, EnrichmentState.EMPTY)

    def states(self, item: Item) -> dict[str, EnrichmentState]:
        key = (kind_of(item), item.id)
        return {field: self.state(key[0], key[1], field) for field in _fields_for(item)}

    def forget(self, item: Item) -> None:
        """Drop tracked state for a deleted item; an in-flight job still finishes and is discarded."""
        self._states.pop((kind_of(item), item.id), None)

    def _set_states(self, key: tuple[str, str], fields: tuple[str, ...], state: EnrichmentState) -> None:
        bucket = self._states.setdefault(key, {})
        for field in fields:
            bucket[field] = state

    # ------------------------------------------------------------------
    # Work
    # ------------------------------------------------------------------
    async def enrich(self, item: Item, text: str | None = None) -> None:
        """Fetch and commit enrichment for ``item`` as it read when ``text`` was taken."""
        key = (kind_of(item), item.id)
        text = item.text if text is None else text
        fields = _fields_for(item)
        self._set_states(key, fields, EnrichmentState.PENDING)
        try:
            if isinstance(item, Word):
                updates = await self._enrich_word(text)
            else:
                updates = await self._enrich_phrase(text)
        except Exception:
            logger.exception("Enrichment for %r failed unexpectedly", text)
            updates = {}
        self._commit(key, text, fields, updates)

    async def _enrich_word(self, text: str) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        try:
            entry = await asyncio.to_thread(self._dictionary.lookup, text)
        except DictionaryNotFoundError:
            logger.info("No dictionary entry for %r", text)
            entry = None
        except ProviderError as exc:
            logger.warning("Dictionary lookup for %r failed: %s", text, exc)
            entry = None

        if entry is not None:
            updates["meanings"] = await self._fill_examples(text, entry.meanings)
            if entry.audio_url:
                updates["audio_url"] = entry.audio_url

        try:
            updates["fun_fact"] = await asyncio.to_thread(fetch_fun_fact, self._text, text)
        except ProviderError as exc:
            logger.warning("Fun fact for %r failed: %s", text, exc)
        return updates

    async def _fill_examples(self, text: str, meanings: list[Meaning]) -> list[Meaning]:
        missing = [meaning for meaning in meanings if not meaning.example]
        if not missing:
            return meanings
        results = await asyncio.gather(
            *(
                asyncio.to_thread(generate_example, self._text, text, meaning.part_of_speech, meaning.definition)
                for meaning in missing
            ),
            return_exceptions=True,
        )
        for meaning, result in zip(missing, results):
            if isinstance(result, Exception):
                logger.warning("Example for %r (%s) failed: %s", text, meaning.part_of_speech, result)
                continue
            if isinstance(result, BaseException):
                raise result
            meaning.example = result
        return meanings

    async def _enrich_phrase(self, text: str) -> dict[str, Any]:
        try:
            return {"fun_opinion": await asyncio.to_thread(fetch_fun_opinion, self._text, text)}
        except ProviderError as exc:
            logger.warning("Fun opinion for %r failed: %s", text, exc)
            return {}

    def _commit(
        self,
        key: tuple[str, str],
        text: str,
        fields: tuple[str, ...],
        updates: dict[str, Any],
    ) -> None:
        kind, item_id = key
        current = self._store.get(kind, item_id)
        if current is None:
            logger.info("%s %s was deleted during enrichment; result discarded", kind, item_id)
            self._states.pop(key, None)
            return
        if current.text != text:
            logger.info("%s %s was renamed during enrichment; result discarded", kind, item_id)
            return

        if updates:
            for field, value in updates.items():
                setattr(current, field, value)
            try:
                self._store.save(current)
            except PersistenceError as exc:
                logger.warning("Could not persist enrichment for %r: %s", text, exc)
                self._set_states(key, fields, EnrichmentState.FAILED)
                return

        for field in fields:
            populated = bool(updates.get(field))
            self._states.setdefault(key, {})[field] = (
                EnrichmentState.POPULATED if populated else EnrichmentState.FAILED
            )


__all__ = ["EnrichmentOrchestrator", "EnrichmentState", "PHRASE_FIELDS", "WORD_FIELDS"]
