"""
Unit tests for criteria composition.
Run: pytest tests/test_filter_facilitator.py
"""

import pytest

from moviefeaster.filter_facilitator import apply_filters
from moviefeaster.models import FilterKind

from conftest import titles


def test_empty_mapping_is_identity(catalog):
	assert apply_filters(catalog, {}) == catalog
	assert apply_filters(catalog, None) == catalog
	assert apply_filters(catalog, {}) is not catalog


def test_criteria_combine_with_and(catalog):
	criteria = {FilterKind.GENRE: "ACTION", FilterKind.YEAR_RANGE: (2000, 2025)}
	assert titles(apply_filters(catalog, criteria)) == ["Inception"]


def test_criteria_order_does_not_change_final_set(catalog):
	forward = {
		FilterKind.MIN_RATING: 7.0,
		FilterKind.GENRE: "ADVENTURE",
		FilterKind.ACTOR: "o",
	}
	backward = dict(reversed(list(forward.items())))
	assert apply_filters(catalog, forward) == apply_filters(catalog, backward)


def test_result_is_subset_of_input(catalog):
	result = apply_filters(catalog, {FilterKind.TITLE_KEYWORD: "e", FilterKind.MAX_RATING: 8.75})
	ids = {m.movie_id for m in catalog}
	assert {m.movie_id for m in result} <= ids
	assert titles(result) == ["The Matrix", "Barbie"]


def test_invalid_value_empties_result(catalog):
	assert apply_filters(catalog, {FilterKind.MIN_RATING: 11.0}) == []
	assert apply_filters(catalog, {FilterKind.TITLE_KEYWORD: ""}) == []


@pytest.mark.parametrize("bad_range", [(2000,), (1990, 2000, 2010), [], None, "2000-2010", 2000])
def test_malformed_year_range_is_skipped(catalog, bad_range):
	# unlike the predicate itself, a malformed range leaves the working set alone
	criteria = {FilterKind.GENRE: "ACTION", FilterKind.YEAR_RANGE: bad_range}
	assert titles(apply_filters(catalog, criteria)) == ["The Matrix", "Inception"]


def test_well_formed_but_inverted_year_range_empties_result(catalog):
	assert apply_filters(catalog, {FilterKind.YEAR_RANGE: [2025, 2000]}) == []


def test_every_kind_is_dispatchable(catalog):
	values = {
		FilterKind.TITLE_KEYWORD: "matrix",
		FilterKind.EXACT_TITLE: "the matrix",
		FilterKind.DIRECTOR: "lana",
		FilterKind.ACTOR: "keanu",
		FilterKind.GENRE: "science",
		FilterKind.YEAR: 1999,
		FilterKind.YEAR_RANGE: (1990, 1999),
		FilterKind.MIN_RATING: 8.0,
		FilterKind.MAX_RATING: 9.0,
		FilterKind.COMMENT_KEYWORD: "classic",
		FilterKind.MIN_COMMUNITY_RATING: 4.0,
	}
	catalog[0].add_comment("A classic")
	catalog[0].add_rating(5.0)
	assert set(values) == set(FilterKind)
	assert titles(apply_filters(catalog, values)) == ["The Matrix"]


def test_unknown_kind_fails_fast(catalog):
	with pytest.raises(ValueError):
		apply_filters(catalog, {"GENRE": "COMEDY"})
