from __future__ import annotations

from ...errors import EmptyTextError
from ...models.item_models import ItemKind


def normalize_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyTextError()
    return cleaned


def is_phrase(text: str) -> bool:
    # str.split() with no separator splits on any run of whitespace.
    return len(text.strip().split()) > 1


def classify(text: str) -> ItemKind:
    cleaned = normalize_text(text)
    return ItemKind.PHRASE if is_phrase(cleaned) else ItemKind.WORD


__all__ = ["classify", "is_phrase", "normalize_text"]
