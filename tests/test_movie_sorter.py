"""
Unit tests for the sort library and top-N selection.
Run: pytest tests/test_movie_sorter.py
"""

import pytest

from moviefeaster import movie_sorter
from moviefeaster.models import Movie, SortKind

from conftest import titles


def test_title_sorts(catalog):
	assert titles(movie_sorter.sort_by_title(catalog)) == ["Barbie", "Inception", "The Matrix"]
	assert titles(movie_sorter.sort_by_title_descending(catalog)) == ["The Matrix", "Inception", "Barbie"]


def test_title_sort_ignores_case_and_keeps_ties_stable():
	movies = [Movie(1, "the end"), Movie(2, "Alpha"), Movie(3, "The End"), Movie(4, "THE END")]
	assert [m.movie_id for m in movie_sorter.sort_by_title(movies)] == [2, 1, 3, 4]
	assert [m.movie_id for m in movie_sorter.sort_by_title_descending(movies)] == [1, 3, 4, 2]


def test_year_sorts(catalog):
	assert titles(movie_sorter.sort_by_year_ascending(catalog)) == ["The Matrix", "Inception", "Barbie"]
	assert titles(movie_sorter.sort_by_year(catalog)) == ["Barbie", "Inception", "The Matrix"]


def test_rating_sorts(catalog):
	assert titles(movie_sorter.sort_by_rating(catalog)) == ["Inception", "The Matrix", "Barbie"]
	assert titles(movie_sorter.sort_by_rating_ascending(catalog)) == ["Barbie", "The Matrix", "Inception"]


def test_community_rating_sorts_are_stable_for_ties(catalog):
	catalog[2].add_rating(4.0)  # Barbie
	# Matrix and Inception tie at 0.0 and keep their input order in both directions
	assert titles(movie_sorter.sort_by_community_rating(catalog)) == ["Barbie", "The Matrix", "Inception"]
	assert titles(movie_sorter.sort_by_community_rating_ascending(catalog)) == ["The Matrix", "Inception", "Barbie"]


def test_descending_rating_keeps_tie_order():
	movies = [Movie(1, "A", rating=5.0), Movie(2, "B", rating=7.0), Movie(3, "C", rating=5.0)]
	assert [m.movie_id for m in movie_sorter.sort_by_rating(movies)] == [2, 1, 3]


def test_sorts_return_new_lists(catalog):
	original = list(catalog)
	result = movie_sorter.sort_by_year(catalog)
	assert catalog == original
	assert result is not catalog


@pytest.mark.parametrize("kind", list(SortKind))
def test_every_kind_handles_none_and_is_idempotent(catalog, kind):
	assert movie_sorter.sort_movies(None, kind) == []
	once = movie_sorter.sort_movies(catalog, kind)
	assert movie_sorter.sort_movies(once, kind) == once


@pytest.mark.parametrize("kind", list(SortKind))
def test_top_n_beyond_size_equals_full_sort(catalog, kind):
	ordered = movie_sorter.sort_movies(catalog, kind)
	assert movie_sorter.top_n(ordered, len(ordered)) == ordered
	assert movie_sorter.top_n(ordered, len(ordered) + 5) == ordered


def test_top_n_bounds(catalog):
	ordered = movie_sorter.sort_by_rating(catalog)
	assert titles(movie_sorter.top_n(ordered, 2)) == ["Inception", "The Matrix"]
	assert movie_sorter.top_n(ordered, 0) == []
	assert movie_sorter.top_n(ordered, -3) == []
	assert movie_sorter.top_n(None, 5) == []
	assert movie_sorter.top_n(ordered, 3) is not ordered


def test_sort_movies_rejects_unknown_kind(catalog):
	with pytest.raises(ValueError):
		movie_sorter.sort_movies(catalog, "title_asc")
