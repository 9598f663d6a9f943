from __future__ import annotations

from nltk.corpus import wordnet

from ...errors import DictionaryNotFoundError, ProviderError
from ...models.item_models import Meaning
from .dictionary_client import DictionaryEntry

_POS_NAMES = {"n": "noun", "v": "verb", "a": "adjective", "s": "adjective", "r": "adverb"}


def get_wordnet():
    try:
        wordnet.synsets("test")
    except LookupError:
        return None
    return wordnet


def _lemma_text(name: str) -> str:
    return name.replace("_", " ").strip().lower()


class WordNetDictionary:
    """Offline lookups against the NLTK WordNet corpus. WordNet has no audio."""

    def __init__(self, max_meanings: int = 8, max_terms: int = 6) -> None:
        self.max_meanings = max_meanings
        self.max_terms = max_terms

    def lookup(self, word: str) -> DictionaryEntry:
        cleaned = (word or "").strip().lower()
        if not cleaned:
            raise DictionaryNotFoundError(word)
        wn = get_wordnet()
        if wn is None:
            raise ProviderError("WordNet corpus is not installed")

        meanings: list[Meaning] = []
        for synset in wn.synsets(cleaned.replace(" ", "_"))[: self.max_meanings]:
            synonyms: list[str] = []
            antonyms: list[str] = []
            for lemma in synset.lemmas():
                name = _lemma_text(lemma.name())
                if name and name != cleaned and name not in synonyms and len(synonyms) < self.max_terms:
                    synonyms.append(name)
                for antonym in lemma.antonyms():
                    opposite = _lemma_text(antonym.name())
                    if opposite and opposite not in antonyms and len(antonyms) < self.max_terms:
                        antonyms.append(opposite)
            examples = synset.examples()
            meanings.append(
                Meaning(
                    part_of_speech=_POS_NAMES.get(synset.pos(), synset.pos()),
                    definition=synset.definition(),
                    example=examples[0] if examples else None,
                    synonyms=synonyms,
                    antonyms=antonyms,
                )
            )
        if not meanings:
            raise DictionaryNotFoundError(cleaned)
        return DictionaryEntry(meanings=meanings, audio_url=None)


__all__ = ["WordNetDictionary", "get_wordnet"]
