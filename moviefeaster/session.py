"""
Catalog session.
Owns the full catalog and the current result set, and re-applies the default
ordering after every query.
"""

from typing import Any, Callable, Mapping, Optional, Sequence, Tuple  # type hints

from loguru import logger  # console logging

from .filter_facilitator import apply_filters  # criteria composition
from .models import FilterKind, Movie, SortKind  # domain types
from .movie_sorter import sort_movies, top_n  # ordering


CatalogFetcher = Callable[[], Sequence[Movie]]  # external catalog source


class CatalogSession:
	"""
	Stateful facade over the filter and sort libraries.

	Both owned collections are replaced, never mutated in place. The session is
	not thread-safe: a concurrent host must serialize calls (a single lock around
	the whole session is enough).
	"""

	def __init__(self, fetch: CatalogFetcher, default_sort: SortKind = SortKind.TITLE_ASC):
		self._fetch = fetch  # catalog source collaborator
		self._all_records: Tuple[Movie, ...] = ()  # full catalog
		self._current_result: Tuple[Movie, ...] = ()  # narrowed and sorted view
		self._default_sort = default_sort  # reapplied after each query
		self.refresh()

	@property
	def all_records(self) -> Tuple[Movie, ...]:
		return self._all_records

	@property
	def current_result(self) -> Tuple[Movie, ...]:
		return self._current_result

	@property
	def default_sort(self) -> SortKind:
		return self._default_sort

	def refresh(self) -> None:
		"""Replace the full catalog from the catalog source."""
		self._all_records = tuple(self._fetch() or ())
		logger.info(f"[Session] Catalog refreshed with {len(self._all_records)} movies")

	def query(self, criteria: Optional[Mapping[FilterKind, Any]] = None) -> Tuple[Movie, ...]:
		"""
		Filter the full catalog by criteria, then order it by the default sort.
		No criteria selects the whole catalog.
		"""
		if not criteria:
			self._current_result = self._all_records
		else:
			self._current_result = tuple(apply_filters(self._all_records, criteria))
		logger.debug(f"[Session] Query matched {len(self._current_result)} of {len(self._all_records)} movies")
		self.sort(self._default_sort)
		return self._current_result

	def sort(self, kind: Optional[SortKind]) -> Tuple[Movie, ...]:
		"""Re-order the current result; None leaves it as is."""
		if kind is None:
			return self._current_result
		self._current_result = tuple(sort_movies(self._current_result, kind))
		return self._current_result

	def set_default_sort(self, kind: SortKind) -> None:
		"""Change the ordering used by future queries; the current result is not re-sorted."""
		self._default_sort = kind
		logger.debug(f"[Session] Default sort set to {kind.token}")

	def top(self, n: int) -> Tuple[Movie, ...]:
		"""First n movies of the current result."""
		return tuple(top_n(self._current_result, n))

	def lookup_by_id(self, movie_id: int) -> Optional[Movie]:
		"""Find a movie in the full catalog; None when absent."""
		for movie in self._all_records:
			if movie.movie_id == movie_id:
				return movie
		return None

	def add_comment(self, movie_id: int, comment: str) -> None:
		"""Append a comment to a catalog movie; unknown ids are ignored."""
		movie = self.lookup_by_id(movie_id)
		if movie is None:
			logger.warning(f"[Session] Comment ignored, no movie with id={movie_id}")
			return
		movie.add_comment(comment)

	def add_rating(self, movie_id: int, rating: float) -> None:
		"""Append a community rating to a catalog movie; unknown ids are ignored."""
		movie = self.lookup_by_id(movie_id)
		if movie is None:
			logger.warning(f"[Session] Rating ignored, no movie with id={movie_id}")
			return
		movie.add_rating(rating)
