from __future__ import annotations

import logging
from typing import Any, Iterable

from ...errors import ItemNotFoundError, ValidationError
from ...models.item_models import (
    Collection,
    DisplayItem,
    Item,
    ItemKind,
    Phrase,
    SortOption,
    ViewParams,
    Word,
)
from ...serializers import COLLECTIONS, PHRASES, WORDS
from .classifier import classify, normalize_text
from .duplicate_guard import ensure_unique
from .enrichment import EnrichmentOrchestrator
from .membership import unique_collections, validate_collection_name
from .store import EntityStore
from .view_pipeline import compute_display_list

logger = logging.getLogger(__name__)

STORE_KIND = {ItemKind.WORD: WORDS, ItemKind.PHRASE: PHRASES}

_WORD_EDITABLE = {"text", "notes", "is_favorite", "is_confident", "collection_names"}
_PHRASE_EDITABLE = {"text", "notes", "is_favorite", "collection_names"}


def _clean_names(names: Iterable[str] | None) -> set[str]:
    return {name.strip() for name in names or [] if name and name.strip()}


class ItemService:
    def __init__(self, store: EntityStore, enrichment: EnrichmentOrchestrator | None = None) -> None:
        self.store = store
        self.enrichment = enrichment

    def _submit(self, item: Item) -> None:
        if self.enrichment is not None:
            self.enrichment.submit(item)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    def build_item(
        self,
        text: str,
        notes: str = "",
        is_favorite: bool = False,
        is_confident: bool = False,
        collection_names: Iterable[str] | None = None,
    ) -> Item:
        cleaned = normalize_text(text)
        ensure_unique(cleaned, self.store.all_words(), self.store.all_phrases())
        names = _clean_names(collection_names)
        if classify(cleaned) == ItemKind.PHRASE:
            return Phrase(
                text=cleaned,
                notes=(notes or "").strip(),
                is_favorite=is_favorite,
                collection_names=names,
            )
        return Word(
            text=cleaned,
            notes=(notes or "").strip(),
            is_favorite=is_favorite,
            is_confident=is_confident,
            collection_names=names,
        )

    def create_item(
        self,
        text: str,
        notes: str = "",
        is_favorite: bool = False,
        is_confident: bool = False,
        collection_names: Iterable[str] | None = None,
        enrich: bool = True,
    ) -> Item:
        item = self.build_item(text, notes, is_favorite, is_confident, collection_names)
        self.store.save(item)
        logger.info("Saved %s %r", item.kind.value, item.text)
        if enrich:
            self._submit(item)
        return item

    def get_item(self, kind: ItemKind, item_id: str) -> Item:
        item = self.store.get(STORE_KIND[kind], item_id)
        if item is None:
            raise ItemNotFoundError(kind.value, item_id)
        return item

    def update_item(self, kind: ItemKind, item_id: str, changes: dict[str, Any]) -> Item:
        item = self.get_item(kind, item_id)
        editable = _WORD_EDITABLE if kind == ItemKind.WORD else _PHRASE_EDITABLE
        unknown = set(changes) - editable
        if unknown:
            raise ValidationError(f"Cannot edit {', '.join(sorted(unknown))} on a {kind.value}")

        text_changed = False
        if "text" in changes:
            cleaned = normalize_text(changes["text"])
            ensure_unique(cleaned, self.store.all_words(), self.store.all_phrases(), excluding_id=item.id)
            text_changed = cleaned != item.text
            changes = {**changes, "text": cleaned}
        if "collection_names" in changes:
            changes = {**changes, "collection_names": _clean_names(changes["collection_names"])}
        if "notes" in changes:
            changes = {**changes, "notes": (changes["notes"] or "").strip()}

        for field, value in changes.items():
            setattr(item, field, value)
        if text_changed:
            self._reset_enrichment(item)
        self.store.save(item)
        if text_changed:
            self._submit(item)
        return item

    def update_word(self, word_id: str, changes: dict[str, Any]) -> Word:
        return self.update_item(ItemKind.WORD, word_id, changes)

    def update_phrase(self, phrase_id: str, changes: dict[str, Any]) -> Phrase:
        return self.update_item(ItemKind.PHRASE, phrase_id, changes)

    @staticmethod
    def _reset_enrichment(item: Item) -> None:
        if isinstance(item, Word):
            item.meanings = []
            item.audio_url = None
            item.fun_fact = ""
        else:
            item.fun_opinion = ""

    def delete_item(self, kind: ItemKind, item_id: str) -> None:
        item = self.get_item(kind, item_id)
        self.store.delete(item)
        if self.enrichment is not None:
            self.enrichment.forget(item)
        if isinstance(item, Word):
            for other_id in list(item.linked_item_ids):
                other = self.store.get(WORDS, other_id)
                if other is not None and item.id in other.linked_item_ids:
                    other.linked_item_ids.discard(item.id)
                    self.store.save(other)

    def refresh_item(self, kind: ItemKind, item_id: str) -> Item:
        item = self.get_item(kind, item_id)
        self._submit(item)
        return item

    # ------------------------------------------------------------------
    # Links between words
    # ------------------------------------------------------------------
    def link_words(self, word_id: str, other_id: str) -> Word:
        if word_id == other_id:
            raise ValidationError("A word cannot be linked to itself")
        word = self.get_item(ItemKind.WORD, word_id)
        other = self.get_item(ItemKind.WORD, other_id)
        word.linked_item_ids.add(other.id)
        other.linked_item_ids.add(word.id)
        self.store.save(word)
        self.store.save(other)
        return word

    def unlink_words(self, word_id: str, other_id: str) -> Word:
        word = self.get_item(ItemKind.WORD, word_id)
        word.linked_item_ids.discard(other_id)
        self.store.save(word)
        other = self.store.get(WORDS, other_id)
        if other is not None and word.id in other.linked_item_ids:
            other.linked_item_ids.discard(word.id)
            self.store.save(other)
        return word

    def linked_words(self, word_id: str) -> list[Word]:
        word = self.get_item(ItemKind.WORD, word_id)
        linked = (self.store.get(WORDS, other_id) for other_id in word.linked_item_ids)
        return sorted((other for other in linked if other is not None), key=lambda other: other.text.casefold())

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def list_collections(self) -> list[Collection]:
        return unique_collections(self.store.fetch_all(COLLECTIONS, SortOption.newest_first()))

    def get_collection(self, collection_id: str) -> Collection:
        collection = self.store.get(COLLECTIONS, collection_id)
        if collection is None:
            raise ItemNotFoundError("collection", collection_id)
        return collection

    def create_collection(self, name: str) -> Collection:
        cleaned = validate_collection_name(name, self.store.all_collections())
        collection = Collection(name=cleaned)
        self.store.save(collection)
        return collection

    def rename_collection(self, collection_id: str, name: str) -> Collection:
        collection = self.get_collection(collection_id)
        cleaned = validate_collection_name(name, self.store.all_collections(), excluding_id=collection.id)
        old_name = collection.name
        if cleaned == old_name:
            return collection
        collection.name = cleaned
        self.store.save(collection)
        for item in [*self.store.all_words(), *self.store.all_phrases()]:
            if old_name in item.collection_names:
                item.collection_names.discard(old_name)
                item.collection_names.add(cleaned)
                self.store.save(item)
        return collection

    def delete_collection(self, collection_id: str, cascade: bool = False) -> None:
        collection = self.get_collection(collection_id)
        self.store.delete(collection)
        if not cascade:
            return
        for item in [*self.store.all_words(), *self.store.all_phrases()]:
            if collection.name in item.collection_names:
                item.collection_names.discard(collection.name)
                self.store.save(item)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def display_list(self, params: ViewParams | None = None) -> list[DisplayItem]:
        return compute_display_list(self.store.all_words(), self.store.all_phrases(), params)


__all__ = ["ItemService", "STORE_KIND"]
