from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from wordvault.errors import PersistenceError
from wordvault.models.item_models import Collection, Phrase, SortOption, Word
from wordvault.serializers import COLLECTIONS, PHRASES, WORDS
from wordvault.services.journal.store import EntityStore, sort_entities
from wordvault.tests.fakes import FakePersistence

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _word(text: str, minutes: int | None = 0, **fields) -> Word:
    created = None if minutes is None else T0 + timedelta(minutes=minutes)
    return Word(text=text, created_at=created, **fields)


def test_date_sort_newest_first_and_missing_dates_are_earliest():
    t1, t2, t3 = _word("one", 1), _word("two", 2), _word("three", 3)
    undated = _word("undated", None)

    newest = sort_entities([t2, undated, t1, t3], SortOption.newest_first())
    oldest = sort_entities([t2, undated, t1, t3], SortOption.oldest_first())

    assert [w.text for w in newest] == ["three", "two", "one", "undated"]
    assert [w.text for w in oldest] == ["undated", "one", "two", "three"]


def test_alphabetical_sort_ignores_case_and_accents():
    words = [_word("banana"), _word("Apple"), _word("éclair"), _word("cherry")]

    ascending = sort_entities(words, SortOption.alphabetical())
    descending = sort_entities(words, SortOption.alphabetical(ascending=False))

    assert [w.text for w in ascending] == ["Apple", "banana", "cherry", "éclair"]
    assert [w.text for w in descending] == ["éclair", "cherry", "banana", "Apple"]


def test_save_is_an_upsert_and_reads_are_sorted(store):
    first = store.save(_word("first", 1))
    store.save(_word("second", 2))
    first.notes = "updated"
    store.save(first)

    assert store.count(WORDS) == 2
    assert store.get(WORDS, first.id).notes == "updated"
    assert [w.text for w in store.fetch_all(WORDS)] == ["second", "first"]


def test_search_and_collection_queries(store):
    store.save(_word("Sunrise", 1, collection_names={"Nature"}))
    store.save(_word("sunset", 2))
    store.save(Phrase(text="under the sun", collection_names={"Nature"}))

    assert [w.text for w in store.search(WORDS, "SUN", SortOption.alphabetical())] == ["Sunrise", "sunset"]
    assert len(store.search(WORDS, "  ")) == 2
    assert [w.text for w in store.fetch_in_collection(WORDS, "Nature")] == ["Sunrise"]
    assert [p.text for p in store.fetch_in_collection(PHRASES, "Nature")] == ["under the sun"]
    with pytest.raises(ValueError):
        store.fetch_in_collection(COLLECTIONS, "Nature")


def test_failed_insert_leaves_nothing_behind():
    persistence = FakePersistence()
    persistence.fail_upserts = True
    store = EntityStore(persistence)

    with pytest.raises(PersistenceError):
        store.save(_word("ghost"))

    assert store.count(WORDS) == 0


def test_failed_update_restores_last_persisted_state():
    persistence = FakePersistence()
    store = EntityStore(persistence)
    word = store.save(_word("cat", notes="purrs", collection_names={"Pets"}))

    persistence.fail_upserts = True
    word.notes = "barks"
    word.collection_names.add("Dogs")
    with pytest.raises(PersistenceError):
        store.save(word)

    assert word.notes == "purrs"
    assert word.collection_names == {"Pets"}
    assert store.get(WORDS, word.id) is word
    assert persistence.docs[WORDS][word.id]["notes"] == "purrs"


def test_failed_delete_keeps_the_entity():
    persistence = FakePersistence()
    store = EntityStore(persistence)
    word = store.save(_word("stay"))

    persistence.fail_deletes = True
    with pytest.raises(PersistenceError):
        store.delete(word)

    assert store.exists(WORDS, word.id)


def test_load_restores_entities_and_skips_unreadable_documents():
    persistence = FakePersistence()
    writer = EntityStore(persistence)
    writer.save(_word("kept", 1, is_favorite=True))
    writer.save(Phrase(text="also kept"))
    writer.save(Collection(name="Travel"))
    persistence.docs[WORDS]["broken"] = {"_id": "broken", "notes": "no text field"}

    reader = EntityStore(persistence)

    assert reader.load() == 3
    assert [w.text for w in reader.all_words()] == ["kept"]
    assert reader.all_words()[0].is_favorite
    assert reader.all_collections()[0].name == "Travel"
    assert reader.all_words()[0].created_at == T0 + timedelta(minutes=1)
