"""
Sort library.
Every sort returns a new list and leaves its input untouched. Python's sort is
stable in both directions, so ties keep their original relative order.
"""

from typing import Callable, Dict, List, Optional, Sequence  # type hints

from loguru import logger  # console logging

from .models import Movie, SortKind  # record and ordering vocabulary


def _sorted(movies: Optional[Sequence[Movie]], key: Callable[[Movie], object], reverse: bool = False) -> List[Movie]:
	if movies is None:  # None behaves like an empty slice
		return []
	return sorted(movies, key=key, reverse=reverse)


def _title_key(movie: Movie) -> str:
	return movie.title.lower()  # "the" and "The" compare equal


def sort_by_title(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""A to Z, case-insensitive."""
	return _sorted(movies, _title_key)


def sort_by_title_descending(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""Z to A, case-insensitive."""
	return _sorted(movies, _title_key, reverse=True)


def sort_by_year_ascending(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""Oldest first."""
	return _sorted(movies, lambda m: m.year)


def sort_by_year(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""Newest first."""
	return _sorted(movies, lambda m: m.year, reverse=True)


def sort_by_rating_ascending(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	return _sorted(movies, lambda m: m.rating)


def sort_by_rating(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""Highest critic rating first."""
	return _sorted(movies, lambda m: m.rating, reverse=True)


def sort_by_community_rating_ascending(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	return _sorted(movies, lambda m: m.community_rating)


def sort_by_community_rating(movies: Optional[Sequence[Movie]]) -> List[Movie]:
	"""Highest community rating first."""
	return _sorted(movies, lambda m: m.community_rating, reverse=True)


def top_n(movies: Optional[Sequence[Movie]], n: int) -> List[Movie]:
	"""First n movies of an already sorted slice."""
	if movies is None or n <= 0:
		return []
	return list(movies[:n])  # slicing past the end yields a full copy


SORTERS: Dict[SortKind, Callable[[Optional[Sequence[Movie]]], List[Movie]]] = {
	SortKind.TITLE_ASC: sort_by_title,
	SortKind.TITLE_DESC: sort_by_title_descending,
	SortKind.YEAR_ASC: sort_by_year_ascending,
	SortKind.YEAR_DESC: sort_by_year,
	SortKind.RATING_ASC: sort_by_rating_ascending,
	SortKind.RATING_DESC: sort_by_rating,
	SortKind.COMMUNITY_RATING_ASC: sort_by_community_rating_ascending,
	SortKind.COMMUNITY_RATING_DESC: sort_by_community_rating,
}

_missing = set(SortKind) - set(SORTERS)
if _missing:
	raise RuntimeError(f"No sorter registered for {sorted(k.name for k in _missing)}")


def sort_movies(movies: Optional[Sequence[Movie]], kind: SortKind) -> List[Movie]:
	"""Sort with the function registered for kind."""
	sorter = SORTERS.get(kind)
	if sorter is None:
		raise ValueError(f"Unsupported sort kind: {kind!r}")
	result = sorter(movies)
	logger.debug(f"[Sorter] Applied {kind.token} to {len(result)} movies")
	return result
