"""
Predicate library.
Each function narrows a slice of movies by one criterion and returns a new list.
Invalid criteria (None, blank, out of range) produce an empty list rather than
the unfiltered input: an unusable value never means "no filter".
"""

from typing import Iterable, List, Optional, Sequence, Union  # type hints

from loguru import logger  # console logging

from .models import Genre, Movie  # catalog record and genre tags


MIN_RATING_BOUND = 0.0  # lowest accepted rating bound
MAX_RATING_BOUND = 10.0  # highest accepted rating bound


def _is_blank(text: Optional[str]) -> bool:
	return text is None or not str(text).strip()


def _any_contains(values: Optional[Iterable[Optional[str]]], needle: str) -> bool:
	"""True if any non-None value contains needle (needle already lowercased)."""
	if values is None:  # a record without the list field never matches
		return False
	return any(v is not None and needle in v.lower() for v in values)


def _valid_rating_bound(bound: Optional[float]) -> bool:
	return bound is not None and MIN_RATING_BOUND <= bound <= MAX_RATING_BOUND


def filter_by_title(movies: Optional[Sequence[Movie]], keyword: Optional[str]) -> List[Movie]:
	"""Movies whose title contains keyword (case-insensitive)."""
	if movies is None or _is_blank(keyword):
		return []
	needle = keyword.lower()
	results = [m for m in movies if m.title is not None and needle in m.title.lower()]
	logger.debug(f"[Filter] title contains '{keyword}': {len(movies)} -> {len(results)}")
	return results


def filter_by_exact_title(movies: Optional[Sequence[Movie]], title: Optional[str]) -> List[Movie]:
	"""Movies whose title equals title, ignoring case."""
	if movies is None or _is_blank(title):
		return []
	needle = title.lower()
	results = [m for m in movies if m.title is not None and m.title.lower() == needle]
	logger.debug(f"[Filter] exact title '{title}': {len(movies)} -> {len(results)}")
	return results


def filter_by_director(movies: Optional[Sequence[Movie]], director_name: Optional[str]) -> List[Movie]:
	"""Movies with at least one director whose name contains director_name."""
	if movies is None or _is_blank(director_name):
		return []
	needle = director_name.lower()
	results = [m for m in movies if _any_contains(m.directors, needle)]
	logger.debug(f"[Filter] director contains '{director_name}': {len(movies)} -> {len(results)}")
	return results


def filter_by_actor(movies: Optional[Sequence[Movie]], actor_name: Optional[str]) -> List[Movie]:
	"""Movies with at least one cast member whose name contains actor_name."""
	if movies is None or _is_blank(actor_name):
		return []
	needle = actor_name.lower()
	results = [m for m in movies if _any_contains(m.castings, needle)]
	logger.debug(f"[Filter] actor contains '{actor_name}': {len(movies)} -> {len(results)}")
	return results


def filter_by_genre(movies: Optional[Sequence[Movie]], genre: Union[Genre, str, None]) -> List[Movie]:
	"""
	Movies tagged with a genre whose enum name contains genre.
	Accepts either a Genre member or its (partial) name, e.g. "COMEDY" or "fiction".
	"""
	if isinstance(genre, Genre):
		genre = genre.name
	if movies is None or _is_blank(genre):
		return []
	needle = genre.lower()
	results = []
	for movie in movies:
		if movie.genres is None:
			continue
		names = [g.name for g in movie.genres if g is not None]
		if _any_contains(names, needle):
			results.append(movie)
	logger.debug(f"[Filter] genre contains '{genre}': {len(movies)} -> {len(results)}")
	return results


def filter_by_year(movies: Optional[Sequence[Movie]], year: Optional[int]) -> List[Movie]:
	"""Movies released in exactly year."""
	if movies is None or year is None or year < 0:
		return []
	results = [m for m in movies if m.year == year]
	logger.debug(f"[Filter] year == {year}: {len(movies)} -> {len(results)}")
	return results


def filter_by_year_range(
	movies: Optional[Sequence[Movie]],
	start_year: Optional[int],
	end_year: Optional[int],
) -> List[Movie]:
	"""Movies released between start_year and end_year inclusive."""
	if movies is None or start_year is None or end_year is None:
		return []
	if start_year < 0 or end_year < 0 or start_year > end_year:
		return []
	results = [m for m in movies if start_year <= m.year <= end_year]
	logger.debug(f"[Filter] year in [{start_year}, {end_year}]: {len(movies)} -> {len(results)}")
	return results


def filter_by_min_rating(movies: Optional[Sequence[Movie]], min_rating: Optional[float]) -> List[Movie]:
	"""Movies with critic rating >= min_rating; the bound itself must lie in 0..10."""
	if movies is None or not _valid_rating_bound(min_rating):
		return []
	results = [m for m in movies if m.rating >= min_rating]
	logger.debug(f"[Filter] rating >= {min_rating}: {len(movies)} -> {len(results)}")
	return results


def filter_by_max_rating(movies: Optional[Sequence[Movie]], max_rating: Optional[float]) -> List[Movie]:
	"""Movies with critic rating <= max_rating; the bound itself must lie in 0..10."""
	if movies is None or not _valid_rating_bound(max_rating):
		return []
	results = [m for m in movies if m.rating <= max_rating]
	logger.debug(f"[Filter] rating <= {max_rating}: {len(movies)} -> {len(results)}")
	return results


def filter_by_comment_keyword(movies: Optional[Sequence[Movie]], keyword: Optional[str]) -> List[Movie]:
	"""Movies with at least one user comment containing keyword."""
	if movies is None or _is_blank(keyword):
		return []
	needle = keyword.lower()
	results = [m for m in movies if _any_contains(m.comments, needle)]
	logger.debug(f"[Filter] comment contains '{keyword}': {len(movies)} -> {len(results)}")
	return results


def filter_by_min_community_rating(movies: Optional[Sequence[Movie]], min_rating: Optional[float]) -> List[Movie]:
	"""Movies whose community (in-app) mean rating is >= min_rating."""
	if movies is None or not _valid_rating_bound(min_rating):
		return []
	results = [m for m in movies if m.community_rating >= min_rating]
	logger.debug(f"[Filter] community rating >= {min_rating}: {len(movies)} -> {len(results)}")
	return results


def combine_and(left: Optional[Sequence[Movie]], right: Optional[Sequence[Movie]]) -> List[Movie]:
	"""
	Intersection of two filtered slices, keeping left's order.
	Membership uses full record equality, not just the id.
	"""
	if left is None or right is None:
		return []
	members = set(right)
	return [m for m in left if m in members]
