from __future__ import annotations

from typing import Iterable

from ...errors import DuplicateItemError
from ...models.item_models import Item, Phrase, Word


def text_key(text: str) -> str:
    return (text or "").strip().casefold()


def find_duplicate(
    candidate_text: str,
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    excluding_id: str | None = None,
) -> Item | None:
    key = text_key(candidate_text)
    if not key:
        return None
    for collection in (words, phrases):
        for item in collection:
            if excluding_id is not None and item.id == excluding_id:
                continue
            if text_key(item.text) == key:
                return item
    return None


def is_duplicate(
    candidate_text: str,
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    excluding_id: str | None = None,
) -> bool:
    return find_duplicate(candidate_text, words, phrases, excluding_id) is not None


def ensure_unique(
    candidate_text: str,
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    excluding_id: str | None = None,
) -> None:
    if is_duplicate(candidate_text, words, phrases, excluding_id):
        raise DuplicateItemError(candidate_text.strip())


__all__ = ["ensure_unique", "find_duplicate", "is_duplicate", "text_key"]
