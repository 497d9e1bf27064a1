"""
TMDB catalog source.
Pulls this month's most popular movies plus their credits and converts them to Movie records.
See https://developer.themoviedb.org/reference/intro/getting-started
"""

import math  # page count
from typing import Dict, List, Optional, Tuple  # type hints

import requests  # HTTP client

from loguru import logger  # console logging

from .config import TMDB_API_URL, TMDB_PAGE_SIZE  # upstream endpoints
from .data_loader import DataLoader  # raw entry -> Movie conversion
from .models import Movie  # catalog record


class TMDBClient:
	"""
	Thin wrapper around the TMDB discover and credits endpoints.
	HTTP failures are logged and produce empty pages/credits instead of raising.
	"""

	def __init__(
		self,
		api_token: str,
		catalog_size: int = 200,
		session: Optional[requests.Session] = None,
		timeout: float = 10.0,
	):
		self.catalog_size = catalog_size  # cap on fetched movies
		self.timeout = timeout  # per-request timeout in seconds
		self.session = session or requests.Session()  # reuse connections
		self.session.headers.update({
			"accept": "application/json",
			"Authorization": f"Bearer {api_token}",
		})
		self.loader = DataLoader()  # shared entry parser

	def _get(self, path: str, params: Optional[Dict] = None) -> Optional[Dict]:
		url = f"{TMDB_API_URL}{path}"
		try:
			response = self.session.get(url, params=params, timeout=self.timeout)
		except requests.RequestException as e:
			logger.error(f"[TMDB] Request to {path} failed: {e}")
			return None
		if response.status_code != 200:
			logger.error(f"[TMDB] {path} returned HTTP {response.status_code}")
			return None
		return response.json()

	def discover_popular(self) -> List[Dict]:
		"""Raw discover entries sorted by popularity, up to catalog_size."""
		total_pages = math.ceil(self.catalog_size / TMDB_PAGE_SIZE)
		entries: List[Dict] = []
		for page in range(1, total_pages + 1):
			payload = self._get("/discover/movie", params={
				"include_adult": "false",
				"include_video": "false",
				"language": "en-US",
				"sort_by": "popularity.desc",
				"page": page,
			})
			if payload is None:
				logger.warning(f"[TMDB] Skipping discover page {page}")
				continue
			entries.extend(payload.get("results") or [])
		logger.info(f"[TMDB] Discovered {len(entries)} raw entries over {total_pages} pages")
		return entries[:self.catalog_size]

	def fetch_credits(self, movie_id: int) -> Tuple[List[str], List[str]]:
		"""(directors, castings) for one movie; empty lists when unavailable."""
		payload = self._get(f"/movie/{movie_id}/credits")
		if payload is None:
			return [], []
		directors = [m.get("name") for m in payload.get("crew") or [] if m.get("job") == "Director" and m.get("name")]
		castings = [a.get("name") for a in payload.get("cast") or [] if a.get("name")]
		return directors, castings

	def fetch_movies(self) -> List[Movie]:
		"""Full catalog pull: discover entries enriched with credits."""
		movies: List[Movie] = []
		for entry in self.discover_popular():
			if entry.get("id") is None:
				logger.warning("[TMDB] Skipping entry without id")
				continue
			directors, castings = self.fetch_credits(entry.get("id"))
			entry = dict(entry, directors=directors, castings=castings)
			try:
				movies.append(self.loader.parse_movie_data(entry))
			except (KeyError, TypeError, ValueError) as e:
				logger.warning(f"[TMDB] Skipping unusable entry {entry.get('id')}: {e}")
		logger.info(f"[TMDB] Built {len(movies)} movies")
		return movies
