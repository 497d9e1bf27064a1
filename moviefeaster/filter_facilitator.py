"""
Query facilitator.
Folds an ordered {FilterKind: value} mapping over a slice of movies, narrowing
the working set one criterion at a time (logical AND across criteria).
"""

from collections import abc  # runtime sequence check
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence  # type hints

from loguru import logger  # console logging

from .models import FilterKind, Movie  # criterion vocabulary and record
from . import movie_filter  # predicate library


def _year_range(movies: List[Movie], value: Any) -> List[Movie]:
	# anything that is not a (start, end) pair leaves the working set unchanged
	if isinstance(value, (str, bytes)) or not isinstance(value, abc.Sequence) or len(value) != 2:
		logger.warning(f"[Facilitator] Ignoring malformed year range: {value!r}")
		return movies
	start, end = value
	return movie_filter.filter_by_year_range(movies, start, end)


PREDICATES: Dict[FilterKind, Callable[[List[Movie], Any], List[Movie]]] = {
	FilterKind.TITLE_KEYWORD: movie_filter.filter_by_title,
	FilterKind.EXACT_TITLE: movie_filter.filter_by_exact_title,
	FilterKind.DIRECTOR: movie_filter.filter_by_director,
	FilterKind.ACTOR: movie_filter.filter_by_actor,
	FilterKind.GENRE: movie_filter.filter_by_genre,
	FilterKind.YEAR: movie_filter.filter_by_year,
	FilterKind.YEAR_RANGE: _year_range,
	FilterKind.MIN_RATING: movie_filter.filter_by_min_rating,
	FilterKind.MAX_RATING: movie_filter.filter_by_max_rating,
	FilterKind.COMMENT_KEYWORD: movie_filter.filter_by_comment_keyword,
	FilterKind.MIN_COMMUNITY_RATING: movie_filter.filter_by_min_community_rating,
}

_missing = set(FilterKind) - set(PREDICATES)
if _missing:
	raise RuntimeError(f"No predicate registered for {sorted(k.name for k in _missing)}")


def apply_filters(movies: Sequence[Movie], criteria: Optional[Mapping[FilterKind, Any]]) -> List[Movie]:
	"""
	Apply every criterion in iteration order, each one to the previous step's output.
	An empty mapping returns a copy of the input. A key that is not a known
	FilterKind raises ValueError.
	"""
	result = list(movies)
	if not criteria:
		return result

	for kind, value in criteria.items():
		predicate = PREDICATES.get(kind) if isinstance(kind, FilterKind) else None
		if predicate is None:
			raise ValueError(f"Unexpected filter kind: {kind!r}")
		before = len(result)
		result = predicate(result, value)
		logger.debug(f"[Facilitator] {kind.name}={value!r}: {before} -> {len(result)}")

	return result
