"""
Unit tests for the suggestion ranker.
"""

import pytest

from workflow_radar.services.suggestions import (
    DEFAULT_SUGGESTIONS,
    Suggestion,
    SuggestionRanker,
)


@pytest.fixture
def ranker() -> SuggestionRanker:
    return SuggestionRanker()


@pytest.mark.parametrize("text", ["", "a", "A", " ", None])
def test_short_input_yields_nothing(ranker, text):
    assert ranker.rank(text) == []


def test_ai_matches_case_insensitively(ranker):
    results = ranker.rank("ai")

    assert Suggestion("AI sentiment about cryptocurrency", "finance") in results


def test_matches_on_category(ranker):
    results = ranker.rank("finance")

    assert results == [Suggestion("AI sentiment about cryptocurrency", "finance")]


@pytest.mark.parametrize("text", ["ai", "te", "ch", "en", "ment", "ec", "xyz-no-match"])
def test_results_are_capped_and_all_match(ranker, text):
    results = ranker.rank(text)

    assert len(results) <= 4
    needle = text.lower()
    for suggestion in results:
        assert needle in suggestion.text.lower() or needle in suggestion.category.lower()


def test_keeps_candidate_order(ranker):
    results = ranker.rank("tech")

    positions = [DEFAULT_SUGGESTIONS.index(s) for s in results]
    assert positions == sorted(positions)
    assert [s.category for s in results] == ["tech", "tech", "tech"]


def test_cap_applies_to_first_matches():
    candidates = [Suggestion(f"topic {n}", "misc") for n in range(10)]
    ranker = SuggestionRanker(candidates)

    assert ranker.rank("topic") == candidates[:4]


def test_tiles(ranker):
    tiles = ranker.tiles()

    assert len(tiles) == 6
    assert tiles[0].title == "AI and Technology"
