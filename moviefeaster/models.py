"""
Data models for the MovieFeaster catalog engine.
Defines the Movie record, its enumerations, and the raw construction payload.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass  # auto-generates __init__, __repr__, etc.
# Enum gives closed vocabularies for genres, filters, sorts and formats
from enum import Enum  # closed enumerations
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, Iterable, List, Optional  # lists and optional values

from loguru import logger  # console logging


UNKNOWN_TITLE = "Unknown Title"  # substituted for blank titles at construction
NO_OVERVIEW = "No Overview"  # substituted for blank overviews at construction
MIN_YEAR_EXCLUSIVE = 1800  # years must be strictly greater than this
MAX_CONSTRUCTION_RATING = 10_000.0  # upstream popularity scores may exceed 10
MAX_UPDATE_RATING = 10.0  # in-place updates use the 0..10 critic scale


class Genre(Enum):
	"""Genre tags, valued by the upstream (TMDB) genre identifier."""
	ACTION = 28
	ADVENTURE = 12
	ANIMATION = 16
	COMEDY = 35
	CRIME = 80
	DOCUMENTARY = 99
	DRAMA = 18
	FAMILY = 10751
	FANTASY = 14
	HISTORY = 36
	HORROR = 27
	MUSIC = 10402
	MYSTERY = 9648
	ROMANCE = 10749
	SCIENCE_FICTION = 878
	TV_MOVIE = 10770
	THRILLER = 53
	WAR = 10752
	WESTERN = 37

	@property
	def genre_id(self) -> int:
		return self.value

	@property
	def label(self) -> str:
		"""Human-readable label, e.g. SCIENCE_FICTION -> 'Science Fiction'."""
		return self.name.replace('_', ' ').title()

	@classmethod
	def from_id(cls, genre_id: Optional[int]) -> Optional["Genre"]:
		"""Look up a genre by its upstream id; None when nothing matches."""
		for genre in cls:
			if genre.value == genre_id:
				return genre
		return None

	@classmethod
	def from_name(cls, name: Optional[str]) -> Optional["Genre"]:
		"""Look up a genre by exact (case-sensitive) enum name; None when nothing matches."""
		for genre in cls:
			if genre.name == name:
				return genre
		return None


class FilterKind(Enum):
	"""Supported filtering criteria."""
	TITLE_KEYWORD = "title_keyword"  # case-insensitive substring of title
	EXACT_TITLE = "exact_title"  # case-insensitive equality of title
	DIRECTOR = "director"  # substring of any director
	ACTOR = "actor"  # substring of any cast member
	GENRE = "genre"  # substring of any genre name
	YEAR = "year"  # exact release year
	YEAR_RANGE = "year_range"  # inclusive (start, end)
	MIN_RATING = "min_rating"  # critic rating lower bound
	MAX_RATING = "max_rating"  # critic rating upper bound
	COMMENT_KEYWORD = "comment_keyword"  # substring of any comment
	MIN_COMMUNITY_RATING = "min_community_rating"  # community mean lower bound


class SortKind(Enum):
	"""Supported orderings; the value is the token used in requests and exports."""
	TITLE_ASC = "title_asc"
	TITLE_DESC = "title_desc"
	YEAR_ASC = "year_asc"
	YEAR_DESC = "year_desc"
	RATING_ASC = "rating_asc"
	RATING_DESC = "rating_desc"
	COMMUNITY_RATING_ASC = "community_rating_asc"
	COMMUNITY_RATING_DESC = "community_rating_desc"

	@property
	def token(self) -> str:
		return self.value

	@classmethod
	def from_token(cls, token: Optional[str]) -> Optional["SortKind"]:
		"""Case-insensitive token lookup; None for unknown or missing tokens."""
		if token is None:
			return None
		for kind in cls:
			if kind.value == token.strip().lower():
				return kind
		return None


class ExportFormat(Enum):
	"""Output formats understood by the data formatter."""
	PRETTY = "pretty"
	JSON = "json"
	XML = "xml"
	CSV = "csv"

	@classmethod
	def from_value(cls, value: Optional[str]) -> Optional["ExportFormat"]:
		if value is None:
			return None
		for fmt in cls:
			if fmt.value == value.strip().lower():
				return fmt
		return None


class CommunityRating:
	"""
	Ordered list of in-app rating submissions.
	The mean is always computed from the submissions, never cached.
	"""

	def __init__(self, submissions: Optional[Iterable[float]] = None):
		self._submissions: List[float] = list(submissions) if submissions is not None else []

	@property
	def submissions(self) -> List[float]:
		return list(self._submissions)  # copy so callers cannot bypass add()

	@property
	def mean(self) -> float:
		"""Arithmetic mean of the submissions; 0.0 when there are none."""
		if not self._submissions:
			return 0.0
		return sum(self._submissions) / len(self._submissions)

	def add(self, value: float) -> None:
		self._submissions.append(value)

	def __len__(self) -> int:
		return len(self._submissions)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, CommunityRating):
			return NotImplemented
		return self._submissions == other._submissions

	def __repr__(self) -> str:
		return f"CommunityRating(submissions={self._submissions!r}, mean={self.mean:.2f})"


@dataclass
class MovieData:
	"""
	Raw construction payload for a Movie, as produced by a catalog source.
	No validation happens here; build_movie() applies the default-substitution rules.
	"""
	movie_id: int  # upstream identifier
	title: Optional[str] = None  # blank becomes "Unknown Title"
	directors: Optional[List[str]] = None  # None becomes []
	year: int = 0  # must be > 1800, otherwise 0
	rating: float = 0.0  # must be within 0..10000, otherwise 0.0
	genres: Optional[List[Genre]] = None  # None becomes []
	overview: Optional[str] = None  # blank becomes "No Overview"
	castings: Optional[List[str]] = None  # None becomes []
	img_url: Optional[str] = None  # None becomes ""


def _is_blank(text: Optional[str]) -> bool:
	return text is None or not text.strip()


class Movie:
	"""
	A single catalog record.

	Construction substitutes defaults for missing or invalid values; the
	property setters apply the (different) rules for in-place updates:
	year must be > 1800 and rating within 0..10, otherwise the update is ignored.
	"""

	def __init__(
		self,
		movie_id: int,
		title: Optional[str] = None,
		directors: Optional[List[str]] = None,
		year: int = 0,
		rating: float = 0.0,
		genres: Optional[List[Genre]] = None,
		overview: Optional[str] = None,
		castings: Optional[List[str]] = None,
		img_url: Optional[str] = None,
	):
		self._movie_id = movie_id  # immutable lookup key
		self._title = UNKNOWN_TITLE if _is_blank(title) else title
		self._directors = directors if directors is not None else []
		self._year = year if year > MIN_YEAR_EXCLUSIVE else 0
		self._rating = rating if 0.0 <= rating <= MAX_CONSTRUCTION_RATING else 0.0
		self._genres = genres if genres is not None else []
		self._overview = NO_OVERVIEW if _is_blank(overview) else overview
		self._castings = castings if castings is not None else []
		self._img_url = img_url if img_url is not None else ""
		self._comments: List[str] = []  # append-only via add_comment
		self._community = CommunityRating()  # per-user submissions

	# --- identity -------------------------------------------------------

	@property
	def movie_id(self) -> int:
		return self._movie_id

	# --- validated fields ----------------------------------------------

	@property
	def title(self) -> str:
		return self._title

	@title.setter
	def title(self, value: Optional[str]) -> None:
		if _is_blank(value):
			logger.debug(f"[Movie] Ignoring blank title update for id={self._movie_id}")
			return
		self._title = value

	@property
	def year(self) -> int:
		return self._year

	@year.setter
	def year(self, value: int) -> None:
		if value > MIN_YEAR_EXCLUSIVE:
			self._year = value
		else:
			logger.debug(f"[Movie] Ignoring year update {value} for id={self._movie_id}")

	@property
	def rating(self) -> float:
		return self._rating

	@rating.setter
	def rating(self, value: float) -> None:
		if 0.0 <= value <= MAX_UPDATE_RATING:
			self._rating = value
		else:
			logger.debug(f"[Movie] Ignoring rating update {value} for id={self._movie_id}")

	@property
	def overview(self) -> Optional[str]:
		return self._overview

	@overview.setter
	def overview(self, value: Optional[str]) -> None:
		self._overview = value  # accepted as-is, blank included

	# --- list fields: None always normalizes to [] ---------------------

	@property
	def directors(self) -> List[str]:
		return self._directors

	@directors.setter
	def directors(self, value: Optional[List[str]]) -> None:
		self._directors = value if value is not None else []

	@property
	def castings(self) -> List[str]:
		return self._castings

	@castings.setter
	def castings(self, value: Optional[List[str]]) -> None:
		self._castings = value if value is not None else []

	@property
	def genres(self) -> List[Genre]:
		return self._genres

	@genres.setter
	def genres(self, value: Optional[List[Genre]]) -> None:
		self._genres = value if value is not None else []

	@property
	def img_url(self) -> str:
		return self._img_url

	@img_url.setter
	def img_url(self, value: Optional[str]) -> None:
		self._img_url = value if value is not None else ""

	@property
	def comments(self) -> List[str]:
		return self._comments

	@comments.setter
	def comments(self, value: Optional[List[str]]) -> None:
		self._comments = list(value) if value is not None else []

	def add_comment(self, comment: str) -> None:
		self._comments.append(comment)

	# --- community rating ----------------------------------------------

	@property
	def community_rating(self) -> float:
		"""Mean of in-app rating submissions (0.0 when none)."""
		return self._community.mean

	@property
	def community_ratings(self) -> List[float]:
		return self._community.submissions

	@community_ratings.setter
	def community_ratings(self, value: Optional[Iterable[float]]) -> None:
		self._community = CommunityRating(value)

	def add_rating(self, rating: float) -> None:
		self._community.add(rating)

	# --- projections ----------------------------------------------------

	def to_dict(self) -> Dict[str, Any]:
		"""Plain-dict view used by exporters and the API layer."""
		return {
			'id': self._movie_id,
			'title': self._title,
			'directors': list(self._directors),
			'year': self._year,
			'rating': self._rating,
			'genres': [g.name for g in self._genres],
			'overview': self._overview,
			'castings': list(self._castings),
			'img_url': self._img_url,
			'comments': list(self._comments),
			'community_rating': self.community_rating,
			'community_rating_count': len(self._community),
		}

	def _identity(self) -> tuple:
		return (
			self._movie_id,
			self._title,
			tuple(self._directors),
			self._year,
			self._rating,
			tuple(self._genres),
			self._overview,
			tuple(self._castings),
			self._img_url,
			tuple(self._comments),
			tuple(self._community.submissions),
		)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Movie):
			return NotImplemented
		return self._identity() == other._identity()

	def __hash__(self) -> int:
		# equal records always share an id, so hashing the id alone is consistent with __eq__
		return hash(self._movie_id)

	def __repr__(self) -> str:
		return (
			f"Movie(id={self._movie_id}, title={self._title!r}, year={self._year}, "
			f"rating={self._rating}, community_rating={self.community_rating:.2f})"
		)


def build_movie(data: MovieData) -> Movie:
	"""Create a Movie from a raw payload, applying the construction defaults."""
	return Movie(
		movie_id=data.movie_id,
		title=data.title,
		directors=data.directors,
		year=data.year,
		rating=data.rating,
		genres=data.genres,
		overview=data.overview,
		castings=data.castings,
		img_url=data.img_url,
	)
