from __future__ import annotations

from wordvault.models.item_models import Phrase, Word
from wordvault.services.journal.stats import compute_stats


def test_stats_bucket_words_and_omit_empty_buckets():
    words = [
        Word(text="ox", is_confident=True),
        Word(text="cat"),
        Word(text="lucid", is_confident=True),
        Word(text="serendipity"),
    ]

    stats = compute_stats(words, [Phrase(text="piece of cake")])

    assert stats["total_words"] == 4
    assert stats["total_phrases"] == 1
    assert stats["word_confidence"] == [
        {"category": "Confident", "count": 2},
        {"category": "Learning", "count": 2},
    ]
    assert stats["word_lengths"] == [
        {"length_category": "1-3", "count": 2},
        {"length_category": "4-6", "count": 1},
        {"length_category": "10+", "count": 1},
    ]


def test_stats_for_an_empty_journal():
    assert compute_stats([], []) == {
        "total_words": 0,
        "total_phrases": 0,
        "word_confidence": [],
        "word_lengths": [],
    }
