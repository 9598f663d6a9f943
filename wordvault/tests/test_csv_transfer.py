from __future__ import annotations

import pytest

from wordvault.errors import ImportFileError
from wordvault.serializers import PHRASES, WORDS
from wordvault.services.journal.csv_transfer import export_csv, import_csv
from wordvault.services.journal.item_service import ItemService
from wordvault.services.journal.store import EntityStore
from wordvault.tests.fakes import FakePersistence


def test_import_classifies_rows_and_counts_duplicates(service, store):
    service.create_item("Existing")
    content = "Item,Notes\nexisting,\nlucid,clear as glass\nbreak a leg,\nLUCID,\n,orphan note\n\n"

    summary = import_csv(content, service, enrich=False)

    assert (summary.added, summary.skipped_duplicates, summary.skipped_invalid) == (2, 2, 1)
    assert summary.message == "Import Complete!\nAdded: 2\nSkipped (duplicates): 2"
    assert store.count(WORDS) == 2
    assert store.count(PHRASES) == 1
    lucid = next(word for word in store.all_words() if word.text == "lucid")
    assert lucid.notes == "clear as glass"


def test_import_accepts_bytes_with_bom(service, store):
    summary = import_csv("\ufeffItem\ncafé\n".encode("utf-8"), service, enrich=False)

    assert summary.added == 1
    assert store.all_words()[0].text == "café"


@pytest.mark.parametrize("content", ["", "Item\n", "\n\n", b"Item\r\n"])
def test_import_rejects_empty_files(service, content):
    with pytest.raises(ImportFileError) as excinfo:
        import_csv(content, service, enrich=False)
    assert "empty" in str(excinfo.value)


def test_import_rejects_non_utf8_bytes(service):
    with pytest.raises(ImportFileError):
        import_csv(b"Item\n\xff\xfe\xfa\n", service, enrich=False)


def test_import_keeps_going_when_a_row_fails_to_save():
    persistence = FakePersistence()
    persistence.fail_texts = {"beta"}
    store = EntityStore(persistence)

    summary = import_csv("Item\nalpha\nbeta\ngamma\n", ItemService(store), enrich=False)

    assert (summary.added, summary.skipped_failed) == (2, 1)
    assert summary.message.endswith("\nFailed to save: 1")
    assert sorted(word.text for word in store.all_words()) == ["alpha", "gamma"]
    assert sorted(doc["text"] for doc in persistence.docs[WORDS].values()) == ["alpha", "gamma"]


def test_export_writes_header_and_sorted_rows(service, store):
    service.create_item("zebra", notes="stripes")
    service.create_item("Apple")
    service.create_item("piece of cake", collection_names=["Idioms"])

    assert export_csv(store) == "Item\nApple\nzebra\npiece of cake\n"
    assert export_csv(store, include_phrases=False, include_notes=True) == "Item,Notes\nApple,\nzebra,stripes\n"
    assert export_csv(store, collection="Idioms") == "Item\npiece of cake\n"


def test_export_quotes_cells_that_need_it(service, store):
    service.create_item("well, well", notes='said "hmm"')

    assert export_csv(store, include_notes=True) == 'Item,Notes\n"well, well","said ""hmm"""\n'


def test_export_then_import_into_a_fresh_journal(service, store):
    service.create_item("Apple", notes="red")
    service.create_item("piece of cake")
    fresh = ItemService(EntityStore())

    summary = import_csv(export_csv(store, include_notes=True), fresh, enrich=False)

    assert summary.added == 2
    assert sorted(item.text for item in fresh.display_list()) == ["Apple", "piece of cake"]
