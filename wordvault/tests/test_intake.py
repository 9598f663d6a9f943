from __future__ import annotations

import asyncio

from wordvault.services.journal.enrichment import EnrichmentOrchestrator
from wordvault.services.journal.intake import SharedInbox, ShareIntake
from wordvault.services.journal.item_service import ItemService
from wordvault.tests.fakes import FakeTextGenerator


def _intake(store, dictionary, text_generator, timeout: float = 2) -> ShareIntake:
    orchestrator = EnrichmentOrchestrator(store, dictionary, text_generator)
    return ShareIntake(ItemService(store, orchestrator), orchestrator, timeout=timeout)


def test_shared_word_is_saved_and_enriched_before_returning(store, dictionary, text_generator):
    intake = _intake(store, dictionary, text_generator)

    result = asyncio.run(intake.accept("  ephemeral\n"))

    assert result.status == "added"
    assert result.text == "ephemeral"
    assert result.item.meanings
    assert result.item.fun_fact


def test_shared_duplicates_and_blanks_are_not_saved(store, dictionary, text_generator):
    intake = _intake(store, dictionary, text_generator)

    async def scenario():
        first = await intake.accept("Ephemeral")
        again = await intake.accept("EPHEMERAL")
        blank = await intake.accept("   ")
        missing = await intake.accept(None)
        return first, again, blank, missing

    first, again, blank, missing = asyncio.run(scenario())

    assert first.status == "added"
    assert again.status == "duplicate"
    assert again.item is None
    assert blank.status == "invalid"
    assert missing.status == "invalid"
    assert len(store.all_words()) == 1


def test_slow_enrichment_times_out_but_keeps_the_item(store, dictionary):
    intake = _intake(store, dictionary, FakeTextGenerator(delay=0.5), timeout=0.01)

    async def scenario():
        result = await intake.accept("take your time")
        await intake.enrichment.drain(timeout=5)
        return result

    result = asyncio.run(scenario())

    assert result.status == "timed_out"
    assert result.item is not None
    assert store.all_phrases()[0].fun_opinion == "A lovely little word."


def test_inbox_flushes_in_arrival_order(store, dictionary, text_generator):
    intake = _intake(store, dictionary, text_generator)
    inbox = SharedInbox()
    inbox.push("serendipity")
    inbox.push("a piece of cake")
    inbox.push("Serendipity")

    assert len(inbox) == 3
    results = asyncio.run(inbox.flush(intake))

    assert [result.status for result in results] == ["added", "added", "duplicate"]
    assert len(inbox) == 0
    assert inbox.pending() == []
