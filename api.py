"""
FastAPI server exposing the movie catalog API.
Endpoints (all under /api/movies unless noted):
- GET /health: basic health check
- GET /api/movies: full catalog
- GET /api/movies/search: multi-filter search, result in the default order
- GET /api/movies/sort?sort_type=...: re-order the current result
- PUT /api/movies/default-sort?sort_type=...: change the default order
- GET /api/movies/genres: available genre names
- GET /api/movies/stats: genres, directors and actors present in the catalog
- GET /api/movies/export?format=...: render the current result (or full catalog)
- GET /api/movies/{movie_id}: one movie
- POST /api/movies/{movie_id}/comment, /rating: user contributions

Startup builds one CatalogSession from the configured catalog source
(JSONL snapshot or TMDB).
"""

# Import standard libraries for locking and timing
import threading  # the session is not thread-safe; FastAPI runs sync handlers in a pool
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for request bodies
from fastapi import Body, FastAPI, HTTPException, Query, Response  # FastAPI primitives
from fastapi.middleware.cors import CORSMiddleware  # allow the browser frontend
from pydantic import BaseModel  # request schema definitions

# Import our internal modules for catalog loading and querying
from moviefeaster.config import get_settings  # environment configuration
from moviefeaster.data_formatter import CONTENT_TYPES, write  # export
from moviefeaster.data_loader import DataLoader  # JSONL catalog source
from moviefeaster.models import Genre, Movie  # domain types
from moviefeaster.query_parser import QueryParser  # raw input -> typed criteria
from moviefeaster.schemas import CatalogStatsOut, MovieOut  # response schemas
from moviefeaster.session import CatalogSession  # filter/sort state
from moviefeaster.tmdb_client import TMDBClient  # TMDB catalog source

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

MIN_USER_RATING = 0.0  # community ratings are on a 0..5 star scale
MAX_USER_RATING = 5.0

# Instantiate the FastAPI application with metadata
app = FastAPI(title="MovieFeaster API", version="1.0.0")  # web app
app.add_middleware(
	CORSMiddleware,
	allow_origins=["http://localhost:3000"],  # React dev server
	allow_methods=["*"],
	allow_headers=["*"],
)

# Globals that hold the session and measured startup time
SESSION: Optional[CatalogSession] = None  # set on startup or by tests
SESSION_LOCK = threading.RLock()  # serializes every session call
PARSER = QueryParser()  # stateless input parser
STARTUP_TIME_S: float = 0.0  # measures how long startup took


class CommentIn(BaseModel):
	comment: str  # free text


class RatingIn(BaseModel):
	rating: float  # 0..5


def build_session() -> CatalogSession:
	"""Create a session backed by the configured catalog source."""
	settings = get_settings()
	if settings.catalog_source == "tmdb":
		logger.info("[API] Using TMDB as catalog source")
		client = TMDBClient(settings.tmdb_api_token, catalog_size=settings.catalog_size)
		fetch = client.fetch_movies
	else:
		logger.info(f"[API] Using JSONL snapshot '{settings.data_path}' as catalog source")
		loader = DataLoader()
		fetch = lambda: loader.load_movies_from_jsonl(settings.data_path)  # noqa: E731
	return CatalogSession(fetch, default_sort=settings.default_sort)


def get_session() -> CatalogSession:
	if SESSION is None:  # session must be ready to serve
		logger.warning("[API] Request received but session not initialized")
		raise HTTPException(status_code=503, detail="Catalog not loaded")
	return SESSION


def _out(movies) -> List[MovieOut]:
	return [MovieOut.from_movie(m) for m in movies]


def _bad_request(e: ValueError) -> HTTPException:
	logger.warning(f"[API] Rejected input: {e}")
	return HTTPException(status_code=400, detail=str(e))


# FastAPI startup hook to initialize the session once
@app.on_event("startup")
def startup_event():
	"""Load the catalog and log how long it took."""
	global SESSION, STARTUP_TIME_S
	if SESSION is not None:  # already provided (tests)
		return
	start = time.time()
	logger.info("[API] Startup: loading catalog...")
	SESSION = build_session()
	STARTUP_TIME_S = time.time() - start
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(SESSION.all_records)} movies.")


@app.get("/health")
def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",
		"catalog_ready": SESSION is not None,
		"startup_seconds": round(STARTUP_TIME_S, 2),
	}


@app.get("/api/movies", response_model=List[MovieOut])
def get_all_movies():
	session = get_session()
	with SESSION_LOCK:
		return _out(session.all_records)


@app.get("/api/movies/search", response_model=List[MovieOut])
def search(
	title: Optional[str] = None,
	exact_title: Optional[str] = None,
	director: Optional[str] = None,
	cast: Optional[str] = None,
	genre: Optional[str] = None,
	year: Optional[str] = None,
	year_range: Optional[str] = Query(None, description="e.g. 1990-1999, 90s, early 2000s, after 2010"),
	min_rating: Optional[str] = None,
	max_rating: Optional[str] = None,
	comment: Optional[str] = None,
	min_community_rating: Optional[str] = None,
):
	"""Multi-filter search; every parameter is optional and they combine with AND."""
	session = get_session()
	try:
		criteria = PARSER.build_criteria(
			title=title,
			exact_title=exact_title,
			director=director,
			cast=cast,
			genre=genre,
			year=year,
			year_range=year_range,
			min_rating=min_rating,
			max_rating=max_rating,
			comment=comment,
			min_community_rating=min_community_rating,
		)
	except ValueError as e:
		raise _bad_request(e) from e

	start = time.time()
	with SESSION_LOCK:
		results = session.query(criteria)
	logger.info(f"[API] /search served {len(results)} results in {(time.time() - start) * 1000:.2f} ms")
	return _out(results)


@app.get("/api/movies/sort", response_model=List[MovieOut])
def sort(sort_type: Optional[str] = None):
	"""Re-order the current result; a missing sort type leaves it unchanged."""
	session = get_session()
	try:
		kind = PARSER.parse_sort(sort_type)
	except ValueError as e:
		raise _bad_request(e) from e
	with SESSION_LOCK:
		return _out(session.sort(kind))


@app.put("/api/movies/default-sort")
def set_default_sort(sort_type: str):
	session = get_session()
	try:
		kind = PARSER.parse_sort(sort_type)
	except ValueError as e:
		raise _bad_request(e) from e
	if kind is None:
		raise HTTPException(status_code=400, detail="sort_type is required")
	with SESSION_LOCK:
		session.set_default_sort(kind)
	return {"default_sort": kind.token}


@app.get("/api/movies/genres", response_model=List[str])
def get_all_genres():
	return [g.name for g in Genre]


@app.get("/api/movies/stats", response_model=CatalogStatsOut)
def get_catalog_stats():
	"""What the loaded catalog actually contains, for building search forms."""
	session = get_session()
	loader = DataLoader()
	with SESSION_LOCK:
		movies = session.all_records
	return CatalogStatsOut(
		movie_count=len(movies),
		genres=[g.name for g in loader.get_all_genres(movies)],
		directors=loader.get_all_directors(movies),
		actors=loader.get_all_actors(movies),
	)


@app.get("/api/movies/export")
def export_movies(format: str = "PRETTY", processed: bool = True):
	"""Render the current result (or the whole catalog) as PRETTY, JSON, XML or CSV."""
	session = get_session()
	fmt = PARSER.parse_format(format)
	with SESSION_LOCK:
		movies = session.current_result if processed else session.all_records
		body = write(movies, fmt)
	content_type, filename = CONTENT_TYPES[fmt]
	return Response(
		content=body,
		media_type=content_type,
		headers={"Content-Disposition": f"attachment; filename={filename}"},
	)


@app.get("/api/movies/{movie_id}", response_model=MovieOut)
def get_movie(movie_id: int):
	session = get_session()
	with SESSION_LOCK:
		movie: Optional[Movie] = session.lookup_by_id(movie_id)
		if movie is None:
			raise HTTPException(status_code=404, detail=f"Movie {movie_id} not found")
		return MovieOut.from_movie(movie)


@app.post("/api/movies/{movie_id}/comment")
def submit_comment(movie_id: int, payload: CommentIn = Body(...)):
	comment = PARSER.parse_text(payload.comment)
	if comment is None:
		raise HTTPException(status_code=400, detail="Invalid comment.")
	session = get_session()
	with SESSION_LOCK:
		session.add_comment(movie_id, comment)
	return {"movie_id": movie_id, "comment": comment}


@app.post("/api/movies/{movie_id}/rating")
def submit_rating(movie_id: int, payload: RatingIn = Body(...)):
	if not MIN_USER_RATING <= payload.rating <= MAX_USER_RATING:
		raise HTTPException(status_code=400, detail="Invalid rating value.")
	session = get_session()
	with SESSION_LOCK:
		session.add_rating(movie_id, payload.rating)
	return {"movie_id": movie_id, "rating": payload.rating}
