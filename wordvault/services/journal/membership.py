from __future__ import annotations

from typing import Iterable

from ...errors import CollectionNameError
from ...models.item_models import (
    FAVORITES_COLLECTION,
    HIDDEN_TAG,
    MAX_COLLECTION_NAME_LENGTH,
    Collection,
    Phrase,
    Word,
)

RESERVED_NAMES = {FAVORITES_COLLECTION.casefold(), HIDDEN_TAG.casefold()}


def _in_collection(item: Word | Phrase, name: str | None) -> bool:
    if name is None:
        return True
    if name == FAVORITES_COLLECTION:
        return item.is_favorite
    return name in item.collection_names


def items_in_collection(
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    name: str | None,
) -> tuple[list[Word], list[Phrase]]:
    """Members of a collection; ``None`` means everything, Favorites is derived from the flag."""
    return (
        [word for word in words if _in_collection(word, name)],
        [phrase for phrase in phrases if _in_collection(phrase, name)],
    )


def unique_collections(collections: Iterable[Collection]) -> list[Collection]:
    seen: set[str] = set()
    unique: list[Collection] = []
    for collection in collections:
        key = collection.name.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(collection)
    return unique


def validate_collection_name(
    name: str | None,
    existing: Iterable[Collection],
    excluding_id: str | None = None,
) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise CollectionNameError("Collection name must not be empty")
    if len(cleaned) > MAX_COLLECTION_NAME_LENGTH:
        raise CollectionNameError(
            f"Collection name must be at most {MAX_COLLECTION_NAME_LENGTH} characters"
        )
    key = cleaned.casefold()
    if key in RESERVED_NAMES:
        raise CollectionNameError(f"'{cleaned}' is a reserved collection name")
    for collection in existing:
        if excluding_id is not None and collection.id == excluding_id:
            continue
        if collection.name.casefold() == key:
            raise CollectionNameError("A collection with this name already exists")
    return cleaned


def collection_overview(
    collections: Iterable[Collection],
    words: Iterable[Word],
    phrases: Iterable[Phrase],
) -> list[dict]:
    words = list(words)
    phrases = list(phrases)
    rows: list[dict] = []
    fav_words, fav_phrases = items_in_collection(words, phrases, FAVORITES_COLLECTION)
    rows.append(
        {
            "id": None,
            "name": FAVORITES_COLLECTION,
            "synthetic": True,
            "word_count": len(fav_words),
            "phrase_count": len(fav_phrases),
        }
    )
    for collection in unique_collections(collections):
        member_words, member_phrases = items_in_collection(words, phrases, collection.name)
        rows.append(
            {
                "id": collection.id,
                "name": collection.name,
                "synthetic": False,
                "word_count": len(member_words),
                "phrase_count": len(member_phrases),
            }
        )
    return rows


__all__ = [
    "RESERVED_NAMES",
    "collection_overview",
    "items_in_collection",
    "unique_collections",
    "validate_collection_name",
]
