"""Derived list computation for the journal views.

``compute_display_list`` is a pure function of the stored words, phrases and
the current view parameters. The stages run in a fixed order: base fetch,
union, de-duplication, search, type filter, empty-search fallback, sort and
finally hidden-tag suppression for the unfiltered view.
"""

from __future__ import annotations

from typing import Iterable

from ...models.item_models import (
    DisplayItem,
    Phrase,
    SortOption,
    TypeFilter,
    ViewParams,
    Word,
)
from .membership import items_in_collection
from .store import sort_entities


def base_fetch(
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    selected_collection: str | None,
    sort: SortOption | None = None,
) -> tuple[list[Word], list[Phrase]]:
    members = items_in_collection(words, phrases, selected_collection)
    return sort_entities(members[0], sort), sort_entities(members[1], sort)


def union(words: Iterable[Word], phrases: Iterable[Phrase]) -> list[DisplayItem]:
    return [DisplayItem.wrap(word) for word in words] + [DisplayItem.wrap(phrase) for phrase in phrases]


def deduplicate(items: Iterable[DisplayItem]) -> list[DisplayItem]:
    seen: set[str] = set()
    unique: list[DisplayItem] = []
    for item in items:
        key = item.text.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def apply_search(items: list[DisplayItem], search_text: str) -> list[DisplayItem]:
    needle = search_text.strip().casefold()
    if not needle:
        return items
    return [item for item in items if needle in item.text.casefold()]


def apply_type_filter(
    items: list[DisplayItem],
    type_filter: TypeFilter,
    confidence_filter: bool | None = None,
) -> list[DisplayItem]:
    if type_filter == TypeFilter.WORDS:
        items = [item for item in items if item.word is not None]
        if confidence_filter is not None:
            items = [item for item in items if item.word.is_confident == confidence_filter]
        return items
    if type_filter == TypeFilter.PHRASES:
        return [item for item in items if item.phrase is not None]
    return items


def sort_items(items: list[DisplayItem], sort: SortOption) -> list[DisplayItem]:
    # DisplayItem exposes text and created_at, which is all sort_entities reads.
    return sort_entities(items, sort)


def suppress_hidden(
    items: list[DisplayItem],
    selected_collection: str | None,
    hidden_tag: str,
) -> list[DisplayItem]:
    if selected_collection is not None or not hidden_tag:
        return items
    return [item for item in items if hidden_tag not in item.collection_names]


def compute_display_list(
    words: Iterable[Word],
    phrases: Iterable[Phrase],
    params: ViewParams | None = None,
) -> list[DisplayItem]:
    params = params or ViewParams()
    base_words, base_phrases = base_fetch(words, phrases, params.selected_collection, params.sort)
    items = deduplicate(union(base_words, base_phrases))
    items = apply_search(items, params.search_text)
    items = apply_type_filter(items, params.type_filter, params.confidence_filter)

    search_text = params.search_text.strip()
    if not items and search_text:
        return [DisplayItem.add_placeholder(search_text)]

    items = sort_items(items, params.sort)
    return suppress_hidden(items, params.selected_collection, params.hidden_tag)


__all__ = [
    "apply_search",
    "apply_type_filter",
    "base_fetch",
    "compute_display_list",
    "deduplicate",
    "sort_items",
    "suppress_hidden",
    "union",
]
