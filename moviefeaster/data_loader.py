"""
Data loading module.
Turns raw catalog entries (JSONL snapshots or TMDB discover results) into Movie records.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read/write JSON lines
from typing import Dict, Iterable, List, Optional, Sequence  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our Movie model and its construction payload
from .models import Genre, Movie, MovieData, build_movie  # structured movie record
from .config import TMDB_IMAGE_BASE_URL  # poster prefix for TMDB paths

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Handles loading and saving of catalog snapshots.
	"""

	def load_movies_from_jsonl(self, filepath) -> List[Movie]:
		"""
		Load movies from a JSON Lines (JSONL) file where each line is one JSON object.
		Returns a list of Movie objects.
		"""
		movies = []  # accumulator for parsed Movie objects
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		with open(filepath, 'r', encoding='utf-8') as f:
			for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
				if not line.strip():  # tolerate blank lines
					continue
				try:
					data = json.loads(line)  # parse JSON object per line
					movies.append(self.parse_movie_data(data))  # convert dict -> Movie
				except json.JSONDecodeError as e:
					logger.warning(f"[DataLoader] Skipping invalid JSON at line {line_num}: {e}")  # malformed line
				except (KeyError, TypeError, ValueError) as e:
					logger.warning(f"[DataLoader] Error parsing movie at line {line_num}: {e}")  # unusable record

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def save_movies_to_jsonl(self, movies: Iterable[Movie], filepath) -> int:
		"""Write movies as JSON Lines; returns the number of records written."""
		filepath = Path(filepath)
		filepath.parent.mkdir(parents=True, exist_ok=True)  # ensure target directory
		count = 0
		with open(filepath, 'w', encoding='utf-8') as f:
			for movie in movies:
				f.write(json.dumps(self.to_record(movie), ensure_ascii=False) + '\n')
				count += 1
		logger.info(f"[DataLoader] Wrote {count} movies to {filepath}")
		return count

	def to_record(self, movie: Movie) -> Dict:
		"""Snapshot shape: the public fields plus the raw community submissions."""
		record = movie.to_dict()
		record.pop('community_rating', None)  # derived, rebuilt from submissions
		record.pop('community_rating_count', None)
		record['community_ratings'] = movie.community_ratings
		return record

	def parse_movie_data(self, data: Dict) -> Movie:
		"""
		Convert a raw dictionary into a Movie.
		Understands both the snapshot shape written by save_movies_to_jsonl and
		the TMDB discover shape (release_date, genre_ids, poster_path, popularity).
		"""
		if 'id' not in data:
			raise KeyError("movie entry has no 'id'")

		payload = MovieData(
			movie_id=int(data['id']),
			title=data.get('title'),
			directors=self._parse_names(data.get('directors')),
			year=self._parse_year(data),
			rating=self._parse_rating(data),
			genres=self._parse_genres(data),
			overview=data.get('overview'),
			castings=self._parse_names(data.get('castings')),
			img_url=self._parse_image(data),
		)
		movie = build_movie(payload)

		# Restore user contributions carried by snapshots
		if data.get('comments'):
			movie.comments = [str(c) for c in data['comments']]
		if data.get('community_ratings'):
			movie.community_ratings = [float(r) for r in data['community_ratings']]
		return movie

	def _parse_names(self, value) -> List[str]:
		"""
		Normalize a value that may be None, a list, or a comma-separated string
		into a list of clean strings.
		"""
		if value is None:  # missing field
			return []
		if isinstance(value, list):  # already a list
			return [str(item).strip() for item in value if item]
		if isinstance(value, str):  # comma-separated string
			return [item.strip() for item in value.split(',') if item.strip()]
		return []  # any other type becomes empty

	def _parse_year(self, data: Dict) -> int:
		if data.get('year'):
			return int(data['year'])
		release_date = data.get('release_date') or ''  # "YYYY-MM-DD"
		head = release_date[:4]
		return int(head) if head.isdigit() else 0

	def _parse_rating(self, data: Dict) -> float:
		# TMDB discover entries carry a popularity score instead of a rating
		for key in ('rating', 'popularity'):
			if data.get(key) is not None:
				return float(data[key])
		return 0.0

	def _parse_genres(self, data: Dict) -> List[Genre]:
		genres: List[Genre] = []
		if data.get('genre_ids'):
			genres = [Genre.from_id(int(gid)) for gid in data['genre_ids']]
		elif data.get('genres'):
			genres = [self._genre_from_value(g) for g in data['genres']]
		return [g for g in genres if g is not None]  # unknown tags are dropped

	def _genre_from_value(self, value) -> Optional[Genre]:
		if isinstance(value, int):
			return Genre.from_id(value)
		if isinstance(value, dict):  # TMDB detail shape {"id": 35, "name": "Comedy"}
			return Genre.from_id(value.get('id'))
		name = str(value).strip().upper().replace(' ', '_').replace('-', '_')
		return Genre.from_name(name)

	def _parse_image(self, data: Dict) -> Optional[str]:
		if data.get('img_url') is not None:
			return data['img_url']
		poster_path = data.get('poster_path')
		return f"{TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None

	def get_all_actors(self, movies: Sequence[Movie]) -> List[str]:
		"""Return a sorted list of all unique cast names in the catalog."""
		actors = set()
		for movie in movies:
			actors.update(movie.castings)
		return sorted(actors)

	def get_all_directors(self, movies: Sequence[Movie]) -> List[str]:
		"""Return a sorted list of all unique director names in the catalog."""
		directors = set()
		for movie in movies:
			directors.update(movie.directors)
		return sorted(directors)

	def get_all_genres(self, movies: Sequence[Movie]) -> List[Genre]:
		"""Return the genres present in the catalog, ordered by name."""
		genres = set()
		for movie in movies:
			genres.update(movie.genres)
		return sorted(genres, key=lambda g: g.name)
