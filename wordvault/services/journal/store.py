from __future__ import annotations

import logging
import unicodedata
from datetime import datetime, timezone
from typing import Any, Iterable, Protocol, TypeVar

from ...errors import PersistenceError
from ...models.item_models import Collection, Phrase, SortOption, Word
from ...serializers import COLLECTIONS, FROM_DOC, PHRASES, TO_DOC, WORDS

logger = logging.getLogger(__name__)

Entity = Word | Phrase | Collection
E = TypeVar("E", Word, Phrase, Collection)

_KIND_BY_TYPE: dict[type, str] = {Word: WORDS, Phrase: PHRASES, Collection: COLLECTIONS}
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


class Persistence(Protocol):
    def upsert(self, collection: str, doc: dict[str, Any]) -> None: ...

    def delete(self, collection: str, doc_id: str) -> None: ...

    def load(self, collection: str) -> list[dict[str, Any]]: ...


def kind_of(entity: Entity) -> str:
    try:
        return _KIND_BY_TYPE[type(entity)]
    except KeyError as exc:
        raise TypeError(f"Unsupported entity type: {type(entity).__name__}") from exc


def primary_text(entity: Entity) -> str:
    if isinstance(entity, Collection):
        return entity.name
    return entity.text


def collation_key(text: str) -> str:
    return unicodedata.normalize("NFKD", text or "").casefold()


def _instant(value: datetime | None) -> datetime:
    if value is None:
        return _EARLIEST
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_entities(entities: Iterable[E], sort: SortOption | None = None) -> list[E]:
    sort = sort or SortOption.newest_first()
    if sort.field == "alphabetical":
        return sorted(
            entities,
            key=lambda entity: collation_key(primary_text(entity)),
            reverse=not sort.ascending,
        )
    return sorted(
        entities,
        key=lambda entity: _instant(entity.created_at),
        reverse=not sort.ascending,
    )


class EntityStore:
    """In-memory identity map of words, phrases and collections.

    Writes go through an optional persistence backend. When a write fails the
    entity is restored to its last persisted state, so a failed save never
    leaves the map ahead of what is stored.
    """

    def __init__(self, persistence: Persistence | None = None) -> None:
        self._persistence = persistence
        self._entities: dict[str, dict[str, Entity]] = {WORDS: {}, PHRASES: {}, COLLECTIONS: {}}
        self._committed: dict[str, dict[str, dict[str, Any]]] = {WORDS: {}, PHRASES: {}, COLLECTIONS: {}}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self) -> int:
        if self._persistence is None:
            return 0
        loaded = 0
        for kind in (WORDS, PHRASES, COLLECTIONS):
            try:
                docs = self._persistence.load(kind)
            except PersistenceError:
                logger.exception("Loading %s failed", kind)
                raise
            for doc in docs:
                try:
                    entity = FROM_DOC[kind](doc)
                except (KeyError, ValueError) as exc:
                    logger.warning("Skipping unreadable %s document %s: %s", kind, doc.get("_id"), exc)
                    continue
                self._entities[kind][entity.id] = entity
                self._committed[kind][entity.id] = TO_DOC[kind](entity)
                loaded += 1
        return loaded

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, entity: E) -> E:
        kind = kind_of(entity)
        bucket = self._entities[kind]
        previous = bucket.get(entity.id)
        doc = TO_DOC[kind](entity)
        bucket[entity.id] = entity
        if self._persistence is not None:
            try:
                self._persistence.upsert(kind, doc)
            except PersistenceError:
                self._rollback(kind, entity, previous)
                logger.warning("Saving %s %s failed; restored last persisted state", kind, entity.id)
                raise
        self._committed[kind][entity.id] = doc
        return entity

    def delete(self, entity: Entity) -> None:
        kind = kind_of(entity)
        bucket = self._entities[kind]
        current = bucket.pop(entity.id, None)
        if current is None:
            return
        if self._persistence is not None:
            try:
                self._persistence.delete(kind, entity.id)
            except PersistenceError:
                bucket[entity.id] = current
                logger.warning("Deleting %s %s failed; entity kept", kind, entity.id)
                raise
        self._committed[kind].pop(entity.id, None)

    def _rollback(self, kind: str, entity: Entity, previous: Entity | None) -> None:
        committed = self._committed[kind].get(entity.id)
        if committed is None:
            self._entities[kind].pop(entity.id, None)
            return
        restored = FROM_DOC[kind](committed)
        for field_name in type(restored).model_fields:
            setattr(entity, field_name, getattr(restored, field_name))
        if previous is not None:
            self._entities[kind][entity.id] = previous

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, kind: str, entity_id: str) -> Entity | None:
        return self._entities[kind].get(entity_id)

    def exists(self, kind: str, entity_id: str) -> bool:
        return entity_id in self._entities[kind]

    def fetch_all(self, kind: str, sort: SortOption | None = None) -> list[Entity]:
        return sort_entities(self._entities[kind].values(), sort)

    def search(self, kind: str, query: str, sort: SortOption | None = None) -> list[Entity]:
        needle = (query or "").strip().casefold()
        if not needle:
            return self.fetch_all(kind, sort)
        matches = [
            entity for entity in self._entities[kind].values() if needle in primary_text(entity).casefold()
        ]
        return sort_entities(matches, sort)

    def fetch_in_collection(self, kind: str, name: str, sort: SortOption | None = None) -> list[Entity]:
        if kind == COLLECTIONS:
            raise ValueError("Collections do not belong to collections")
        members = [entity for entity in self._entities[kind].values() if name in entity.collection_names]
        return sort_entities(members, sort)

    def all_words(self) -> list[Word]:
        return list(self._entities[WORDS].values())

    def all_phrases(self) -> list[Phrase]:
        return list(self._entities[PHRASES].values())

    def all_collections(self) -> list[Collection]:
        return list(self._entities[COLLECTIONS].values())

    def count(self, kind: str) -> int:
        return len(self._entities[kind])


__all__ = ["EntityStore", "Persistence", "collation_key", "kind_of", "primary_text", "sort_entities"]
