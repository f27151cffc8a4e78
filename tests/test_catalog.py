"""
Catalog engine tests - filtering, sorting and statistics over plain sequences.
"""

import pytest

from mediashelf.core.catalog import (
    filter_items,
    sort_items,
    aggregate,
    browse,
    describe_empty_view,
)
from mediashelf.core.schema import MediaItem


def make_item(item_id, title, media_type="movie", rating=3, date_added="2024-01-01",
              creator=None, review=None):
    return MediaItem(
        id=item_id,
        type=media_type,
        title=title,
        rating=rating,
        date_added=date_added,
        creator=creator,
        review=review,
    )


@pytest.fixture
def dune_and_arrival():
    return [
        make_item("1", "Dune", media_type="book", rating=5, date_added="2024-01-01"),
        make_item("2", "Arrival", media_type="movie", rating=4, date_added="2024-02-01"),
    ]


@pytest.fixture
def library():
    return [
        make_item("a", "The Matrix", "movie", 5, "2024-03-01T10:00:00.000Z", creator="Lana Wachowski"),
        make_item("b", "Neuromancer", "book", 4, "2024-01-15T08:30:00.000Z", creator="William Gibson"),
        make_item("c", "Hardcore History", "podcast", 5, "2024-02-20T12:00:00.000Z", creator="Dan Carlin"),
        make_item("d", "matrix reloaded", "movie", 2, "2024-04-01T09:00:00.000Z"),
        make_item("e", "Émile", "book", 3, "2023-12-31T23:59:59.000Z", creator="Rousseau"),
    ]


class TestDuneArrivalScenario:
    """Two-item collection with known answers."""

    def test_filter_by_query(self, dune_and_arrival):
        result = filter_items(dune_and_arrival, "du", "all")
        assert [item.title for item in result] == ["Dune"]

    def test_sort_by_title(self, dune_and_arrival):
        result = sort_items(dune_and_arrival, "title")
        assert [item.title for item in result] == ["Arrival", "Dune"]

    def test_aggregate(self, dune_and_arrival):
        stats = aggregate(dune_and_arrival)
        assert stats.total_reviews == 2
        assert stats.average_rating == 4.5
        assert stats.by_type["movie"].average_rating == 4
        assert stats.by_type["book"].count == 1
        assert stats.by_type["podcast"].count == 0
        assert stats.by_type["podcast"].average_rating == 0

    def test_recent_activity_is_newest_first(self, dune_and_arrival):
        stats = aggregate(dune_and_arrival)
        assert [item.title for item in stats.recent_activity] == ["Arrival", "Dune"]


class TestFilter:

    def test_empty_query_and_all_is_identity(self, library):
        assert filter_items(library, "", "all") == library

    def test_query_is_case_insensitive(self, library):
        result = filter_items(library, "MATRIX", "all")
        assert [item.id for item in result] == ["a", "d"]

    def test_query_matches_creator(self, library):
        result = filter_items(library, "gibson", "all")
        assert [item.id for item in result] == ["b"]

    def test_missing_creator_does_not_match(self, library):
        # "d" has no creator; only its title is searched
        result = filter_items(library, "wachowski", "all")
        assert [item.id for item in result] == ["a"]

    def test_type_selector(self, library):
        result = filter_items(library, "", "podcast")
        assert [item.id for item in result] == ["c"]

    def test_query_and_type_combine(self, library):
        result = filter_items(library, "matrix", "book")
        assert result == []

    def test_substring_not_tokenized(self, library):
        assert filter_items(library, "rix rel", "all")[0].id == "d"
        assert filter_items(library, "matrix the", "all") == []

    def test_unknown_type_selector(self, library):
        with pytest.raises(ValueError):
            filter_items(library, "", "vinyl")

    def test_input_not_mutated(self, library):
        snapshot = list(library)
        filter_items(library, "matrix", "movie")
        assert library == snapshot


class TestSort:

    def test_recent_is_descending_by_date(self, library):
        result = sort_items(library, "recent")
        assert [item.id for item in result] == ["d", "a", "c", "b", "e"]

    def test_rating_is_descending_and_stable(self, library):
        result = sort_items(library, "rating")
        assert [item.id for item in result] == ["a", "c", "b", "e", "d"]

    def test_rating_sort_is_idempotent(self, library):
        once = sort_items(library, "rating")
        assert sort_items(once, "rating") == once

    def test_title_ignores_case_and_accents(self, library):
        result = sort_items(library, "title")
        assert [item.title for item in result] == [
            "Émile", "Hardcore History", "matrix reloaded", "Neuromancer", "The Matrix"
        ]

    def test_sort_returns_new_list(self, library):
        snapshot = list(library)
        result = sort_items(library, "title")
        assert result is not library
        assert library == snapshot

    def test_mixed_date_formats(self):
        items = [
            make_item("old", "Old", date_added="2024-01-01"),
            make_item("new", "New", date_added="2024-01-01T00:00:01.000Z"),
        ]
        assert [item.id for item in sort_items(items, "recent")] == ["new", "old"]

    def test_unparseable_date_sorts_last(self):
        items = [
            make_item("bad", "Bad", date_added="not a date"),
            make_item("good", "Good", date_added="2020-05-05"),
        ]
        assert [item.id for item in sort_items(items, "recent")] == ["good", "bad"]

    def test_unknown_mode(self, library):
        with pytest.raises(ValueError):
            sort_items(library, "popularity")


class TestAggregate:

    def test_empty_collection_has_zero_averages(self):
        stats = aggregate([])
        assert stats.total_reviews == 0
        assert stats.average_rating == 0
        for media_type in ("movie", "book", "podcast"):
            assert stats.by_type[media_type].count == 0
            assert stats.by_type[media_type].average_rating == 0
        assert stats.recent_activity == []

    @pytest.mark.parametrize("size", [0, 1, 3, 5])
    def test_total_matches_length(self, library, size):
        assert aggregate(library[:size]).total_reviews == size

    def test_per_type_averages(self, library):
        stats = aggregate(library)
        assert stats.average_rating == pytest.approx(19 / 5)
        assert stats.by_type["movie"].count == 2
        assert stats.by_type["movie"].average_rating == 3.5
        assert stats.by_type["book"].average_rating == 3.5
        assert stats.by_type["podcast"].average_rating == 5

    def test_to_dict_uses_persisted_names(self, dune_and_arrival):
        data = aggregate(dune_and_arrival).to_dict()
        assert data["totalReviews"] == 2
        assert data["byType"]["podcast"] == {"count": 0, "averageRating": 0}
        assert data["recentActivity"][0]["dateAdded"] == "2024-02-01"


def test_browse_filters_then_sorts(library):
    result = browse(library, query="matrix", media_type="movie", mode="rating")
    assert [item.id for item in result] == ["a", "d"]


@pytest.mark.parametrize("query,media_type,total,expected", [
    ("dune", "all", 4, "No results found"),
    ("", "all", 0, "No reviews yet"),
    ("", "podcast", 3, "No podcast reviews"),
])
def test_describe_empty_view(query, media_type, total, expected):
    heading, hint = describe_empty_view(query, media_type, total)
    assert heading == expected
    assert hint
