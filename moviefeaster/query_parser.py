"""
Query parsing module.
Turns raw request strings into typed criterion values and assembles the
ordered {FilterKind: value} mapping handed to the catalog session.
Blank input means "not supplied"; malformed input raises ValueError.
"""

import re  # regex for year expressions
from typing import Any, Dict, Optional, Tuple  # type annotations

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging

from .models import ExportFormat, FilterKind, Genre, SortKind  # typed vocabularies


MIN_YEAR = 1800  # sane calendar range for user-supplied years
MAX_YEAR = 2100


class QueryParser:
	"""
	Parses raw request parameters into typed criteria.
	Year ranges accept explicit ranges, decades and before/after phrases;
	genres accept enum names, common synonyms, or close misspellings.
	"""

	# Pre-compiled regex patterns for date expressions
	RE_DECADE = re.compile(r"^(?P<prefix>early|mid|late)?\s*'?(?P<decade>\d{2})\s*'?s$", re.I)  # '90s, mid 80s
	RE_CENTURY_DECADE = re.compile(r"^(?P<prefix>early|mid|late)?\s*(?P<century>\d{4})\s*'?s$", re.I)  # early 2000s
	RE_RANGE = re.compile(r"^(\d{4})\s*(?:-|–|to|,)\s*(\d{4})$", re.I)  # 1990-1999
	RE_BEFORE = re.compile(r"^before\s+(\d{4})$", re.I)  # before 2000
	RE_AFTER = re.compile(r"^after\s+(\d{4})$", re.I)  # after 2010

	# Genre synonyms: common user phrasings -> Genre
	GENRE_SYNONYMS: Dict[str, Genre] = {
		'sci-fi': Genre.SCIENCE_FICTION,
		'sci fi': Genre.SCIENCE_FICTION,
		'scifi': Genre.SCIENCE_FICTION,
		'science-fiction': Genre.SCIENCE_FICTION,
		'funny': Genre.COMEDY,
		'romantic': Genre.ROMANCE,
		'animated': Genre.ANIMATION,
		'cartoon': Genre.ANIMATION,
		'tv': Genre.TV_MOVIE,
		'historical': Genre.HISTORY,
		'musical': Genre.MUSIC,
		'scary': Genre.HORROR,
		'kids': Genre.FAMILY,
	}

	FUZZY_GENRE_THRESHOLD = 85  # minimum rapidfuzz score for a genre guess

	def __init__(self):
		# Lowercased labels ("science fiction") keyed back to their enum member
		self._genre_labels = {g.label.lower(): g for g in Genre}
		self._genre_choices = sorted(self._genre_labels)
		logger.debug(f"[Parser] Initialized with {len(self._genre_choices)} genres")

	# --- scalar parsers -------------------------------------------------

	def parse_text(self, raw: Optional[str]) -> Optional[str]:
		"""Trimmed text or None when blank."""
		if raw is None or not raw.strip():
			return None
		return raw.strip()

	def parse_year(self, raw: Optional[str]) -> Optional[int]:
		"""Integer year within 1800..2100, None when blank."""
		text = self.parse_text(raw)
		if text is None:
			return None
		try:
			year = int(text)
		except ValueError as e:
			raise ValueError("Year must be a number.") from e
		if year < MIN_YEAR or year > MAX_YEAR:
			raise ValueError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}.")
		return year

	def parse_rating(self, raw: Optional[str]) -> Optional[float]:
		"""Float rating bound, None when blank. Range checks are left to the predicates."""
		text = self.parse_text(raw)
		if text is None:
			return None
		try:
			return float(text)
		except ValueError as e:
			raise ValueError("Rating must be a number.") from e

	def parse_year_range(self, raw: Optional[str]) -> Optional[Tuple[int, int]]:
		"""
		Inclusive (start, end) from "1990-1999", "1990 to 1999", "90s",
		"early 2000s", "before 2000" or "after 2010".
		"""
		q = self.parse_text(raw)
		if q is None:
			return None
		q = q.lower()
		logger.debug("[Parser] Year range extraction: scanning '{}'", q)

		r = self.RE_RANGE.match(q)
		if r:
			start, end = int(r.group(1)), int(r.group(2))
			if start > end:  # normalize order
				start, end = end, start
			return (start, end)

		m = self.RE_BEFORE.match(q)
		if m:
			return (MIN_YEAR, int(m.group(1)) - 1)
		m = self.RE_AFTER.match(q)
		if m:
			return (int(m.group(1)) + 1, MAX_YEAR)

		m = self.RE_CENTURY_DECADE.match(q)
		if m:
			return self._prefix_to_range(int(m.group("century")), (m.group("prefix") or "").lower())

		# 90s/80s decade mapping (00-29->2000s, 30-99->1900s)
		m = self.RE_DECADE.match(q)
		if m:
			dec = int(m.group("decade"))
			base = 1900 if dec >= 30 else 2000
			return self._prefix_to_range(base + dec, (m.group("prefix") or "").lower())

		raise ValueError(f"Unrecognized year range: '{raw}'")

	def _prefix_to_range(self, decade_start: int, prefix: str) -> Tuple[int, int]:
		# Convert optional prefix into a sub-range within the decade
		if prefix == "early":
			return (decade_start, decade_start + 4)
		if prefix == "mid":
			return (decade_start + 5, decade_start + 9)
		if prefix == "late":
			return (decade_start + 7, decade_start + 9)
		return (decade_start, decade_start + 9)

	def parse_genre(self, raw: Optional[str]) -> Optional[Genre]:
		"""Genre by enum name, label, synonym, or fuzzy match; None when blank."""
		text = self.parse_text(raw)
		if text is None:
			return None

		exact = Genre.from_name(text)
		if exact is not None:
			return exact

		key = text.lower().replace('_', ' ')
		if key in self._genre_labels:
			return self._genre_labels[key]
		if key in self.GENRE_SYNONYMS:
			logger.debug(f"[Parser] Genre synonym match: '{key}' -> {self.GENRE_SYNONYMS[key].name}")
			return self.GENRE_SYNONYMS[key]

		# Fuzzy match to handle small typos/variants
		match = process.extractOne(key, self._genre_choices, scorer=fuzz.ratio)
		if match and match[1] >= self.FUZZY_GENRE_THRESHOLD:
			logger.debug(f"[Parser] Genre fuzzy match: '{key}' -> '{match[0]}' (score={match[1]:.0f})")
			return self._genre_labels[match[0]]

		raise ValueError(f"Unknown genre: '{text}'")

	def parse_sort(self, raw: Optional[str]) -> Optional[SortKind]:
		"""SortKind from its token; None when blank."""
		text = self.parse_text(raw)
		if text is None:
			return None
		kind = SortKind.from_token(text)
		if kind is None:
			raise ValueError(f"Unknown sort type: '{text}'")
		return kind

	def parse_format(self, raw: Optional[str]) -> ExportFormat:
		"""Export format; blank or unknown values fall back to PRETTY."""
		fmt = ExportFormat.from_value(self.parse_text(raw))
		return fmt or ExportFormat.PRETTY

	# --- criteria assembly ----------------------------------------------

	def build_criteria(
		self,
		title: Optional[str] = None,
		exact_title: Optional[str] = None,
		director: Optional[str] = None,
		cast: Optional[str] = None,
		genre: Optional[str] = None,
		year: Optional[str] = None,
		year_range: Optional[str] = None,
		min_rating: Optional[str] = None,
		max_rating: Optional[str] = None,
		comment: Optional[str] = None,
		min_community_rating: Optional[str] = None,
	) -> Dict[FilterKind, Any]:
		"""Ordered criteria mapping from optional raw parameters; blank ones are omitted."""
		parsed = [
			(FilterKind.TITLE_KEYWORD, self.parse_text(title)),
			(FilterKind.EXACT_TITLE, self.parse_text(exact_title)),
			(FilterKind.DIRECTOR, self.parse_text(director)),
			(FilterKind.ACTOR, self.parse_text(cast)),
			(FilterKind.GENRE, self.parse_genre(genre)),
			(FilterKind.YEAR, self.parse_year(year)),
			(FilterKind.YEAR_RANGE, self.parse_year_range(year_range)),
			(FilterKind.MIN_RATING, self.parse_rating(min_rating)),
			(FilterKind.MAX_RATING, self.parse_rating(max_rating)),
			(FilterKind.COMMENT_KEYWORD, self.parse_text(comment)),
			(FilterKind.MIN_COMMUNITY_RATING, self.parse_rating(min_community_rating)),
		]
		criteria = {kind: value for kind, value in parsed if value is not None}
		logger.debug(f"[Parser] Criteria: {[k.name for k in criteria]}")
		return criteria
