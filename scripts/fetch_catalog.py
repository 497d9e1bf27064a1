"""
Fetch the catalog from TMDB and persist it as a JSONL snapshot.

This script:
1) Pulls the most popular movies of the month from TMDB (discover endpoint)
2) Enriches each one with directors and cast (credits endpoint)
3) Writes data/movies.jsonl (or MOVIEFEASTER_DATA_PATH)

Usage:
    TMDB_API_TOKEN=... python -m scripts.fetch_catalog

The API loads this snapshot at startup when MOVIEFEASTER_CATALOG_SOURCE=file.
"""

import time  # measure step timings

from loguru import logger  # console logging

from moviefeaster.config import get_settings  # environment configuration
from moviefeaster.data_loader import DataLoader  # JSONL writer
from moviefeaster.tmdb_client import TMDBClient  # TMDB catalog source


def main():
	logger.info("=" * 60)
	logger.info("Fetch TMDB Catalog")
	logger.info("=" * 60)

	settings = get_settings()
	if not settings.tmdb_api_token:
		logger.error("TMDB_API_TOKEN is not set; aborting.")
		raise SystemExit(1)

	# 1) Fetch
	logger.info(f"[1/2] Fetching up to {settings.catalog_size} movies...")
	t0 = time.time()
	client = TMDBClient(settings.tmdb_api_token, catalog_size=settings.catalog_size)
	movies = client.fetch_movies()
	logger.info(f"[OK] Fetched {len(movies)} movies in {time.time() - t0:.2f}s")

	# 2) Save
	logger.info(f"[2/2] Writing snapshot to {settings.data_path}...")
	DataLoader().save_movies_to_jsonl(movies, settings.data_path)
	logger.info("[OK] Saved.")
	logger.info("=" * 60)


if __name__ == '__main__':
	main()
