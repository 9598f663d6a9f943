from __future__ import annotations

from typing import Iterable

from ...models.item_models import Phrase, Word

LENGTH_BUCKETS = (("1-3", 1, 3), ("4-6", 4, 6), ("7-9", 7, 9), ("10+", 10, None))


def _length_bucket(length: int) -> str:
    for label, low, high in LENGTH_BUCKETS:
        if length >= low and (high is None or length <= high):
            return label
    return LENGTH_BUCKETS[0][0]


def compute_stats(words: Iterable[Word], phrases: Iterable[Phrase]) -> dict:
    words = list(words)
    phrases = list(phrases)

    confident = sum(1 for word in words if word.is_confident)
    confidence = [
        {"category": category, "count": count}
        for category, count in (("Confident", confident), ("Learning", len(words) - confident))
        if count > 0
    ]

    counts = {label: 0 for label, _, _ in LENGTH_BUCKETS}
    for word in words:
        counts[_length_bucket(len(word.text))] += 1
    lengths = [{"length_category": label, "count": counts[label]} for label, _, _ in LENGTH_BUCKETS if counts[label]]

    return {
        "total_words": len(words),
        "total_phrases": len(phrases),
        "word_confidence": confidence,
        "word_lengths": lengths,
    }


__all__ = ["compute_stats"]
