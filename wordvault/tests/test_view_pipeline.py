from __future__ import annotations

from datetime import datetime, timedelta, timezone

from wordvault.models.item_models import (
    FAVORITES_COLLECTION,
    HIDDEN_TAG,
    Phrase,
    SortOption,
    TypeFilter,
    ViewParams,
    Word,
)
from wordvault.services.journal.view_pipeline import (
    apply_search,
    compute_display_list,
    deduplicate,
    suppress_hidden,
    union,
)

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def _journal():
    words = [
        Word(text="alpha", created_at=_at(1), is_confident=True, collection_names={"Greek"}),
        Word(text="beta", created_at=_at(2), is_favorite=True),
        Word(text="gamma", created_at=_at(3), collection_names={"Greek", HIDDEN_TAG}),
    ]
    phrases = [
        Phrase(text="alpha and omega", created_at=_at(4), collection_names={"Greek"}),
        Phrase(text="beta test", created_at=_at(5), is_favorite=True),
    ]
    return words, phrases


def _texts(items) -> list[str]:
    return [item.text for item in items]


def test_default_view_is_newest_first_without_hidden_items():
    words, phrases = _journal()

    result = compute_display_list(words, phrases)

    assert _texts(result) == ["beta test", "alpha and omega", "beta", "alpha"]


def test_identical_inputs_give_identical_output():
    words, phrases = _journal()
    params = ViewParams(search_text="a", sort=SortOption.alphabetical())

    first = compute_display_list(words, phrases, params)
    second = compute_display_list(words, phrases, params)

    assert [(item.kind, item.item_id) for item in first] == [(item.kind, item.item_id) for item in second]


def test_case_variant_duplicates_collapse_to_first_seen():
    older = Word(text="Fresh", created_at=_at(1))
    newer = Word(text="fresh", created_at=_at(2))

    result = compute_display_list([older, newer], [])

    assert len(result) == 1
    assert result[0].item_id == newer.id


def test_dedup_prefers_words_over_phrases_with_the_same_text():
    word = Word(text="hello", created_at=_at(1))
    phrase = Phrase(text="Hello", created_at=_at(9))

    items = deduplicate(union([word], [phrase]))

    assert [item.kind for item in items] == ["word"]


def test_search_with_no_match_returns_single_placeholder():
    words, phrases = _journal()

    for type_filter in TypeFilter:
        for sort in (SortOption.newest_first(), SortOption.alphabetical(ascending=False)):
            result = compute_display_list(
                words, phrases, ViewParams(search_text="  xyzzy ", type_filter=type_filter, sort=sort)
            )
            assert len(result) == 1
            assert result[0].is_placeholder
            assert result[0].text == "xyzzy"
            assert result[0].label == 'Add "xyzzy"...'


def test_placeholder_wins_over_hidden_suppression():
    hidden = Word(text="secret", collection_names={HIDDEN_TAG})

    # "secret" matches the search but is hidden; the match still counts.
    result = compute_display_list([hidden], [], ViewParams(search_text="secret"))
    assert result == []

    result = compute_display_list([hidden], [], ViewParams(search_text="nothing"))
    assert [item.kind for item in result] == ["add_placeholder"]


def test_hidden_items_show_inside_their_own_collection():
    words, phrases = _journal()

    all_view = compute_display_list(words, phrases)
    greek_view = compute_display_list(words, phrases, ViewParams(selected_collection="Greek"))

    assert "gamma" not in _texts(all_view)
    assert _texts(greek_view) == ["alpha and omega", "gamma", "alpha"]


def test_favorites_view_uses_the_flag():
    words, phrases = _journal()

    result = compute_display_list(words, phrases, ViewParams(selected_collection=FAVORITES_COLLECTION))

    assert _texts(result) == ["beta test", "beta"]


def test_type_and_confidence_filters():
    words, phrases = _journal()

    only_words = compute_display_list(words, phrases, ViewParams(type_filter=TypeFilter.WORDS))
    confident = compute_display_list(
        words, phrases, ViewParams(type_filter=TypeFilter.WORDS, confidence_filter=True)
    )
    learning = compute_display_list(
        words, phrases, ViewParams(type_filter=TypeFilter.WORDS, confidence_filter=False)
    )
    only_phrases = compute_display_list(
        words, phrases, ViewParams(type_filter=TypeFilter.PHRASES, confidence_filter=True)
    )

    assert _texts(only_words) == ["beta", "alpha"]
    assert _texts(confident) == ["alpha"]
    assert _texts(learning) == ["beta"]
    assert _texts(only_phrases) == ["beta test", "alpha and omega"]


def test_sort_by_date_ascending_and_descending():
    t1 = Word(text="one", created_at=_at(1))
    t2 = Word(text="two", created_at=_at(2))
    t3 = Word(text="three", created_at=_at(3))
    undated = Word(text="undated", created_at=None)

    descending = compute_display_list([t2, t1, t3, undated], [], ViewParams(sort=SortOption.newest_first()))
    ascending = compute_display_list([t2, t1, t3, undated], [], ViewParams(sort=SortOption.oldest_first()))

    assert _texts(descending) == ["three", "two", "one", "undated"]
    assert _texts(ascending) == ["undated", "one", "two", "three"]


def test_stage_helpers():
    items = union([Word(text="Apple")], [Phrase(text="apple pie")])

    assert _texts(apply_search(items, " PIE ")) == ["apple pie"]
    assert apply_search(items, "") == items
    assert suppress_hidden(items, "Anything", HIDDEN_TAG) == items
