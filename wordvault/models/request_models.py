from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ItemCreate(BaseModel):
    text: str
    notes: str = ""
    is_favorite: bool = False
    is_confident: bool = False
    collection_names: list[str] = Field(default_factory=list)


class WordUpdate(BaseModel):
    text: str | None = None
    notes: str | None = None
    is_favorite: bool | None = None
    is_confident: bool | None = None
    collection_names: list[str] | None = None


class PhraseUpdate(BaseModel):
    text: str | None = None
    notes: str | None = None
    is_favorite: bool | None = None
    collection_names: list[str] | None = None


class MeaningResponse(BaseModel):
    part_of_speech: str
    definition: str
    example: str | None = None
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)


class ItemResponse(BaseModel):
    id: str
    kind: Literal["word", "phrase"]
    text: str
    notes: str
    created_at: str | None = None
    collection_names: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    is_confident: bool | None = None
    meanings: list[MeaningResponse] | None = None
    fun_fact: str | None = None
    audio_url: str | None = None
    linked_item_ids: list[str] | None = None
    fun_opinion: str | None = None


class DisplayItemResponse(BaseModel):
    kind: Literal["word", "phrase", "add_placeholder"]
    id: str | None = None
    text: str
    label: str
    notes: str | None = None
    created_at: str | None = None
    is_favorite: bool | None = None
    is_confident: bool | None = None
    collection_names: list[str] = Field(default_factory=list)


class CollectionCreate(BaseModel):
    name: str


class CollectionResponse(BaseModel):
    id: str
    name: str
    created_at: str | None = None


class CollectionOverview(BaseModel):
    id: str | None = None
    name: str
    synthetic: bool
    word_count: int
    phrase_count: int


class ImportRequest(BaseModel):
    content: str


class ImportResponse(BaseModel):
    added: int
    skipped_duplicates: int
    skipped_invalid: int
    skipped_failed: int = 0
    message: str


class ShareRequest(BaseModel):
    text: str


class ShareResponse(BaseModel):
    status: Literal["added", "duplicate", "invalid", "timed_out"]
    text: str
    item: ItemResponse | None = None


class EnrichmentStatusResponse(BaseModel):
    id: str
    kind: Literal["word", "phrase"]
    pending: bool
    fields: dict[str, str]


class PracticeRequest(BaseModel):
    answer: str


class PracticeResponse(BaseModel):
    word_id: str
    mode: Literal["definition", "usage"]
    category: str
    stars: int
    feedback: str
