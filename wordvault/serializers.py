from datetime import datetime, timezone
from typing import Any

from .models.item_models import Collection, DisplayItem, Meaning, Phrase, Word

WORDS = "words"
PHRASES = "phrases"
COLLECTIONS = "collections"


def _iso(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.isoformat()


def _aware(dt: datetime | None) -> datetime | None:
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def word_to_doc(word: Word) -> dict[str, Any]:
    return {
        "_id": word.id,
        "text": word.text,
        "text_key": word.text.casefold(),
        "notes": word.notes,
        "meanings": [meaning.model_dump() for meaning in word.meanings],
        "created_at": word.created_at,
        "collection_names": sorted(word.collection_names),
        "is_favorite": word.is_favorite,
        "is_confident": word.is_confident,
        "fun_fact": word.fun_fact,
        "audio_url": word.audio_url,
        "linked_item_ids": sorted(word.linked_item_ids),
    }


def phrase_to_doc(phrase: Phrase) -> dict[str, Any]:
    return {
        "_id": phrase.id,
        "text": phrase.text,
        "text_key": phrase.text.casefold(),
        "notes": phrase.notes,
        "created_at": phrase.created_at,
        "collection_names": sorted(phrase.collection_names),
        "is_favorite": phrase.is_favorite,
        "fun_opinion": phrase.fun_opinion,
    }


def collection_to_doc(collection: Collection) -> dict[str, Any]:
    return {
        "_id": collection.id,
        "name": collection.name,
        "name_key": collection.name.casefold(),
        "created_at": collection.created_at,
    }


def word_from_doc(doc: dict[str, Any]) -> Word:
    return Word(
        id=str(doc["_id"]),
        text=doc["text"],
        notes=doc.get("notes", ""),
        meanings=[Meaning.model_validate(item) for item in doc.get("meanings") or []],
        created_at=_aware(doc.get("created_at")),
        collection_names=set(doc.get("collection_names") or []),
        is_favorite=bool(doc.get("is_favorite", False)),
        is_confident=bool(doc.get("is_confident", False)),
        fun_fact=doc.get("fun_fact", ""),
        audio_url=doc.get("audio_url"),
        linked_item_ids=set(doc.get("linked_item_ids") or []),
    )


def phrase_from_doc(doc: dict[str, Any]) -> Phrase:
    return Phrase(
        id=str(doc["_id"]),
        text=doc["text"],
        notes=doc.get("notes", ""),
        created_at=_aware(doc.get("created_at")),
        collection_names=set(doc.get("collection_names") or []),
        is_favorite=bool(doc.get("is_favorite", False)),
        fun_opinion=doc.get("fun_opinion", ""),
    )


def collection_from_doc(doc: dict[str, Any]) -> Collection:
    return Collection(
        id=str(doc["_id"]),
        name=doc["name"],
        created_at=_aware(doc.get("created_at")),
    )


def serialize_word(word: Word) -> dict[str, Any]:
    return {
        "id": word.id,
        "kind": "word",
        "text": word.text,
        "notes": word.notes,
        "meanings": [meaning.model_dump() for meaning in word.meanings],
        "created_at": _iso(word.created_at),
        "collection_names": sorted(word.collection_names),
        "is_favorite": word.is_favorite,
        "is_confident": word.is_confident,
        "fun_fact": word.fun_fact,
        "audio_url": word.audio_url,
        "linked_item_ids": sorted(word.linked_item_ids),
    }


def serialize_phrase(phrase: Phrase) -> dict[str, Any]:
    return {
        "id": phrase.id,
        "kind": "phrase",
        "text": phrase.text,
        "notes": phrase.notes,
        "created_at": _iso(phrase.created_at),
        "collection_names": sorted(phrase.collection_names),
        "is_favorite": phrase.is_favorite,
        "fun_opinion": phrase.fun_opinion,
    }


def serialize_item(item: Word | Phrase) -> dict[str, Any]:
    if isinstance(item, Word):
        return serialize_word(item)
    return serialize_phrase(item)


def serialize_collection(collection: Collection) -> dict[str, Any]:
    return {
        "id": collection.id,
        "name": collection.name,
        "created_at": _iso(collection.created_at),
    }


TO_DOC = {
    WORDS: word_to_doc,
    PHRASES: phrase_to_doc,
    COLLECTIONS: collection_to_doc,
}

FROM_DOC = {
    WORDS: word_from_doc,
    PHRASES: phrase_from_doc,
    COLLECTIONS: collection_from_doc,
}


def serialize_display_item(entry: DisplayItem) -> dict[str, Any]:
    return {
        "kind": entry.kind,
        "id": entry.item_id,
        "text": entry.text,
        "label": entry.label,
        "notes": entry.notes,
        "created_at": _iso(entry.created_at),
        "is_favorite": entry.is_favorite,
        "is_confident": entry.is_confident,
        "collection_names": sorted(entry.collection_names),
    }
