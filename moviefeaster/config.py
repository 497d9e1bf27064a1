"""
Shared configuration.
Values come from the environment (optionally a local .env file).
"""

from dataclasses import dataclass  # immutable settings container
from os import getenv  # environment access
from pathlib import Path  # filesystem paths

from dotenv import load_dotenv  # read .env into the environment

from .models import SortKind  # default ordering

load_dotenv()

TMDB_API_URL = "https://api.themoviedb.org/3"  # upstream catalog API
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"  # poster prefix
TMDB_PAGE_SIZE = 20  # results per discover page


@dataclass(frozen=True)
class Settings:
	tmdb_api_token: str  # bearer token for TMDB
	data_path: Path  # JSONL catalog snapshot
	catalog_source: str  # "file" or "tmdb"
	catalog_size: int  # max movies pulled from TMDB
	default_sort: SortKind  # ordering applied after each query


def get_settings() -> Settings:
	"""Build Settings from the current environment."""
	default_sort = SortKind.from_token(getenv("MOVIEFEASTER_DEFAULT_SORT", "title_asc")) or SortKind.TITLE_ASC
	return Settings(
		tmdb_api_token=getenv("TMDB_API_TOKEN", ""),
		data_path=Path(getenv("MOVIEFEASTER_DATA_PATH", "data/movies.jsonl")),
		catalog_source=getenv("MOVIEFEASTER_CATALOG_SOURCE", "file").strip().lower(),
		catalog_size=int(getenv("MOVIEFEASTER_CATALOG_SIZE", "200")),
		default_sort=default_sort,
	)
