from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import requests
from pydantic import BaseModel, Field

from ...config import DICTIONARY_API_BASE, DICTIONARY_TIMEOUT
from ...errors import DictionaryNotFoundError, ProviderError
from ...models.item_models import Meaning

logger = logging.getLogger(__name__)


class DictionaryEntry(BaseModel):
    meanings: list[Meaning] = Field(default_factory=list)
    audio_url: str | None = None


class Dictionary(Protocol):
    def lookup(self, word: str) -> DictionaryEntry: ...


def _clean_terms(terms: Any) -> list[str]:
    if not isinstance(terms, list):
        return []
    return [term.strip() for term in terms if isinstance(term, str) and term.strip()]


def _records(value: Any) -> list[dict | None]:
    """List entries as dicts, with ``None`` standing in for anything else."""
    if not isinstance(value, list):
        return []
    return [entry if isinstance(entry, dict) else None for entry in value]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_entries(word: str, payload: Any) -> DictionaryEntry:
    """Flatten the first API entry into one Meaning per definition."""
    if not isinstance(payload, list) or not payload:
        raise DictionaryNotFoundError(word)
    first = payload[0]
    if not isinstance(first, dict):
        raise ProviderError(f"Unexpected dictionary payload for '{word}'")

    meanings: list[Meaning] = []
    malformed = 0
    for meaning in _records(first.get("meanings")):
        if meaning is None:
            malformed += 1
            continue
        part_of_speech = _text(meaning.get("partOfSpeech"))
        shared_synonyms = _clean_terms(meaning.get("synonyms"))
        shared_antonyms = _clean_terms(meaning.get("antonyms"))
        for definition in _records(meaning.get("definitions")):
            if definition is None:
                malformed += 1
                continue
            text = _text(definition.get("definition"))
            if not text:
                continue
            example = _text(definition.get("example")) or None
            meanings.append(
                Meaning(
                    part_of_speech=part_of_speech,
                    definition=text,
                    example=example,
                    synonyms=_clean_terms(definition.get("synonyms")) or shared_synonyms,
                    antonyms=_clean_terms(definition.get("antonyms")) or shared_antonyms,
                )
            )
    if not meanings:
        if malformed:
            raise ProviderError(f"Unexpected dictionary payload for '{word}'")
        raise DictionaryNotFoundError(word)
    if malformed:
        logger.warning("Skipped %d malformed dictionary records for %s", malformed, word)

    audio_url = None
    for phonetic in _records(first.get("phonetics")):
        audio = _text(phonetic.get("audio")) if phonetic is not None else ""
        if audio:
            audio_url = audio
            break
    return DictionaryEntry(meanings=meanings, audio_url=audio_url)


class DictionaryClient:
    def __init__(
        self,
        base_url: str = DICTIONARY_API_BASE,
        timeout: float = DICTIONARY_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def lookup(self, word: str) -> DictionaryEntry:
        cleaned = (word or "").strip().lower()
        if not cleaned:
            raise DictionaryNotFoundError(word)
        try:
            response = self._session.get(f"{self.base_url}/{quote(cleaned)}", timeout=self.timeout)
        except requests.RequestException as exc:
            logger.debug("Dictionary request failed for %s: %s", cleaned, exc)
            raise ProviderError(f"Dictionary request failed: {exc}") from exc
        if response.status_code == 404:
            raise DictionaryNotFoundError(cleaned)
        if response.status_code != 200:
            raise ProviderError(f"Dictionary returned HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Dictionary returned malformed JSON") from exc
        return parse_entries(cleaned, payload)

    def download_audio(self, url: str) -> bytes:
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ProviderError(f"Audio download failed: {exc}") from exc
        return response.content


class FallbackDictionary:
    """Ask ``primary`` first; consult ``secondary`` only when the primary is unreachable."""

    def __init__(self, primary: Dictionary, secondary: Dictionary) -> None:
        self.primary = primary
        self.secondary = secondary

    def lookup(self, word: str) -> DictionaryEntry:
        try:
            return self.primary.lookup(word)
        except DictionaryNotFoundError:
            raise
        except ProviderError as exc:
            logger.warning("Primary dictionary unavailable for %s, using fallback: %s", word, exc)
            return self.secondary.lookup(word)


__all__ = ["Dictionary", "DictionaryClient", "DictionaryEntry", "FallbackDictionary", "parse_entries"]
