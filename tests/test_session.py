"""
Unit tests for the catalog session: query, sort, default ordering and user contributions.
Run: pytest tests/test_session.py
"""

from moviefeaster.models import FilterKind, Movie, SortKind
from moviefeaster.session import CatalogSession

from conftest import make_catalog, titles


def test_construction_fetches_once_and_leaves_result_empty():
	calls = []

	def fetch():
		calls.append(1)
		return make_catalog()

	session = CatalogSession(fetch)
	assert len(calls) == 1
	assert len(session.all_records) == 3
	assert session.current_result == ()
	assert session.default_sort is SortKind.TITLE_ASC


def test_genre_query(session):
	assert titles(session.query({FilterKind.GENRE: "COMEDY"})) == ["Barbie"]


def test_year_range_query_comes_back_in_default_order(session):
	result = session.query({FilterKind.YEAR_RANGE: [2000, 2025]})
	assert titles(result) == ["Barbie", "Inception"]
	assert session.current_result == result


def test_out_of_domain_bound_returns_nothing(session):
	assert session.query({FilterKind.MIN_RATING: 11.0}) == ()


def test_empty_query_returns_full_sorted_catalog(session):
	assert titles(session.query({})) == ["Barbie", "Inception", "The Matrix"]
	assert titles(session.query(None)) == ["Barbie", "Inception", "The Matrix"]


def test_sort_reorders_current_result(session):
	session.query({})
	assert titles(session.sort(SortKind.YEAR_DESC)) == ["Barbie", "Inception", "The Matrix"]
	assert titles(session.sort(SortKind.RATING_DESC)) == ["Inception", "The Matrix", "Barbie"]
	assert titles(session.sort(None)) == ["Inception", "The Matrix", "Barbie"]


def test_default_sort_is_not_retroactive(session):
	session.query({})
	session.set_default_sort(SortKind.YEAR_ASC)
	assert titles(session.current_result) == ["Barbie", "Inception", "The Matrix"]
	assert titles(session.query({})) == ["The Matrix", "Inception", "Barbie"]


def test_refresh_replaces_catalog_but_not_result():
	batches = [make_catalog(), [Movie(1, "Solo")]]
	session = CatalogSession(lambda: batches.pop(0))
	session.query({})
	session.refresh()
	assert titles(session.all_records) == ["Solo"]
	assert titles(session.current_result) == ["Barbie", "Inception", "The Matrix"]


def test_lookup_scans_full_catalog_not_result(session):
	session.query({FilterKind.GENRE: "COMEDY"})
	assert session.lookup_by_id(603).title == "The Matrix"
	assert session.lookup_by_id(42) is None


def test_add_rating_round_trip(session):
	session.add_rating(603, 4.0)
	assert session.lookup_by_id(603).community_rating == 4.0
	session.add_rating(603, 2.0)
	assert session.lookup_by_id(603).community_rating == 3.0


def test_unknown_id_mutations_are_silent(session):
	before = [m.to_dict() for m in session.all_records]
	session.add_rating(999, 5.0)
	session.add_comment(999, "hello")
	assert [m.to_dict() for m in session.all_records] == before


def test_comments_feed_comment_filter(session):
	session.add_comment(27205, "Dream within a dream")
	assert titles(session.query({FilterKind.COMMENT_KEYWORD: "DREAM"})) == ["Inception"]


def test_community_rating_query_and_sort(session):
	session.add_rating(346698, 5.0)
	session.add_rating(603, 3.0)
	assert titles(session.query({FilterKind.MIN_COMMUNITY_RATING: 3.0})) == ["Barbie", "The Matrix"]
	assert titles(session.sort(SortKind.COMMUNITY_RATING_ASC)) == ["The Matrix", "Barbie"]


def test_query_result_is_subset_of_catalog(session):
	result = session.query({FilterKind.TITLE_KEYWORD: "a", FilterKind.MIN_RATING: 7.5})
	assert {m.movie_id for m in result} <= {m.movie_id for m in session.all_records}


def test_top_returns_prefix_of_current_result(session):
	session.query({})
	assert titles(session.top(2)) == ["Barbie", "Inception"]
	assert session.top(0) == ()
