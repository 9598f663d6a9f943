from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

FAVORITES_COLLECTION = "Favorites"
HIDDEN_TAG = "_predefined_secret_"
MAX_COLLECTION_NAME_LENGTH = 20


def _new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ItemKind(str, Enum):
    WORD = "word"
    PHRASE = "phrase"


class TypeFilter(str, Enum):
    ALL = "all"
    WORDS = "words"
    PHRASES = "phrases"


class SortOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: Literal["date_added", "alphabetical"] = "date_added"
    ascending: bool = False

    @classmethod
    def newest_first(cls) -> "SortOption":
        return cls(field="date_added", ascending=False)

    @classmethod
    def oldest_first(cls) -> "SortOption":
        return cls(field="date_added", ascending=True)

    @classmethod
    def alphabetical(cls, ascending: bool = True) -> "SortOption":
        return cls(field="alphabetical", ascending=ascending)


class Meaning(BaseModel):
    part_of_speech: str
    definition: str
    example: str | None = None
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)


class Word(BaseModel):
    id: str = Field(default_factory=_new_id)
    text: str = Field(..., min_length=1)
    notes: str = ""
    meanings: list[Meaning] = Field(default_factory=list)
    created_at: datetime | None = Field(default_factory=utcnow)
    collection_names: set[str] = Field(default_factory=set)
    is_favorite: bool = False
    is_confident: bool = False
    fun_fact: str = ""
    audio_url: str | None = None
    linked_item_ids: set[str] = Field(default_factory=set)

    @property
    def kind(self) -> ItemKind:
        return ItemKind.WORD


class Phrase(BaseModel):
    id: str = Field(default_factory=_new_id)
    text: str = Field(..., min_length=1)
    notes: str = ""
    created_at: datetime | None = Field(default_factory=utcnow)
    collection_names: set[str] = Field(default_factory=set)
    is_favorite: bool = False
    fun_opinion: str = ""

    @property
    def kind(self) -> ItemKind:
        return ItemKind.PHRASE


class Collection(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1, max_length=MAX_COLLECTION_NAME_LENGTH)
    created_at: datetime | None = Field(default_factory=utcnow)


Item = Word | Phrase


class DisplayItem(BaseModel):
    """One row of the rendered list: a word, a phrase, or the "add it" offer."""

    kind: Literal["word", "phrase", "add_placeholder"]
    word: Word | None = None
    phrase: Phrase | None = None
    placeholder_text: str | None = None

    @classmethod
    def wrap(cls, item: Item) -> "DisplayItem":
        if isinstance(item, Word):
            return cls(kind="word", word=item)
        return cls(kind="phrase", phrase=item)

    @classmethod
    def add_placeholder(cls, text: str) -> "DisplayItem":
        return cls(kind="add_placeholder", placeholder_text=text)

    @property
    def item(self) -> Item | None:
        return self.word if self.word is not None else self.phrase

    @property
    def is_placeholder(self) -> bool:
        return self.kind == "add_placeholder"

    @property
    def item_id(self) -> str | None:
        item = self.item
        return item.id if item is not None else None

    @property
    def text(self) -> str:
        item = self.item
        if item is None:
            return self.placeholder_text or ""
        return item.text

    @property
    def label(self) -> str:
        if self.is_placeholder:
            return f'Add "{self.placeholder_text}"...'
        return self.text

    @property
    def created_at(self) -> datetime | None:
        item = self.item
        return item.created_at if item is not None else None

    @property
    def collection_names(self) -> set[str]:
        item = self.item
        return item.collection_names if item is not None else set()

    @property
    def is_favorite(self) -> bool | None:
        item = self.item
        return item.is_favorite if item is not None else None

    @property
    def is_confident(self) -> bool | None:
        if self.word is not None:
            return self.word.is_confident
        if self.phrase is not None:
            return False
        return None

    @property
    def notes(self) -> str | None:
        item = self.item
        return item.notes if item is not None else None


class ViewParams(BaseModel):
    selected_collection: str | None = None
    search_text: str = ""
    type_filter: TypeFilter = TypeFilter.ALL
    confidence_filter: bool | None = None
    sort: SortOption = Field(default_factory=SortOption.newest_first)
    hidden_tag: str = HIDDEN_TAG


__all__ = [
    "Collection",
    "DisplayItem",
    "FAVORITES_COLLECTION",
    "HIDDEN_TAG",
    "Item",
    "ItemKind",
    "MAX_COLLECTION_NAME_LENGTH",
    "Meaning",
    "Phrase",
    "SortOption",
    "TypeFilter",
    "ViewParams",
    "Word",
    "utcnow",
]
