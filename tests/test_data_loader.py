"""
Unit tests for DataLoader: parsing raw entries and JSONL snapshots.
Run: pytest tests/test_data_loader.py
"""

import json

import pytest

from moviefeaster.data_loader import DataLoader
from moviefeaster.models import Genre

from conftest import make_catalog


@pytest.fixture
def loader() -> DataLoader:
	return DataLoader()


def test_parse_tmdb_discover_entry(loader):
	movie = loader.parse_movie_data({
		"id": 603,
		"title": "The Matrix",
		"release_date": "1999-03-30",
		"genre_ids": [28, 878, 1],
		"overview": "",
		"popularity": 123.4,
		"poster_path": "/matrix.jpg",
		"directors": ["Lana Wachowski"],
	})
	assert movie.movie_id == 603
	assert movie.year == 1999
	assert movie.rating == 123.4
	assert movie.genres == [Genre.ACTION, Genre.SCIENCE_FICTION]  # unknown id 1 dropped
	assert movie.overview == "No Overview"
	assert movie.img_url == "https://image.tmdb.org/t/p/w500/matrix.jpg"
	assert movie.directors == ["Lana Wachowski"]
	assert movie.castings == []


def test_parse_snapshot_entry(loader):
	movie = loader.parse_movie_data({
		"id": "7",
		"title": "Heat",
		"year": 1995,
		"rating": 8.3,
		"genres": ["CRIME", "Science Fiction", {"id": 53, "name": "Thriller"}, "Polka"],
		"castings": "Al Pacino, Robert De Niro",
		"comments": ["tense"],
		"community_ratings": [4, 5],
	})
	assert movie.movie_id == 7
	assert movie.genres == [Genre.CRIME, Genre.SCIENCE_FICTION, Genre.THRILLER]
	assert movie.castings == ["Al Pacino", "Robert De Niro"]
	assert movie.comments == ["tense"]
	assert movie.community_rating == 4.5


def test_parse_without_id_fails(loader):
	with pytest.raises(KeyError):
		loader.parse_movie_data({"title": "Nameless"})


def test_missing_file_raises(loader, tmp_path):
	with pytest.raises(FileNotFoundError):
		loader.load_movies_from_jsonl(tmp_path / "missing.jsonl")


def test_load_skips_bad_lines(loader, tmp_path):
	path = tmp_path / "movies.jsonl"
	path.write_text(
		json.dumps({"id": 1, "title": "Good"}) + "\n"
		+ "{not json\n"
		+ "\n"
		+ json.dumps({"title": "No id"}) + "\n"
		+ json.dumps({"id": 2, "title": "Also good", "year": 2001}) + "\n",
		encoding="utf-8",
	)
	movies = loader.load_movies_from_jsonl(path)
	assert [m.title for m in movies] == ["Good", "Also good"]


def test_snapshot_round_trip_keeps_user_contributions(loader, tmp_path):
	catalog = make_catalog()
	catalog[0].add_comment("whoa")
	catalog[0].add_rating(5.0)
	catalog[0].add_rating(4.0)
	path = tmp_path / "data" / "movies.jsonl"

	assert loader.save_movies_to_jsonl(catalog, path) == 3
	loaded = loader.load_movies_from_jsonl(path)
	assert loaded == catalog


def test_catalog_statistics(loader):
	catalog = make_catalog()
	assert "Christopher Nolan" in loader.get_all_directors(catalog)
	assert len(loader.get_all_actors(catalog)) == 6
	assert loader.get_all_genres(catalog) == [
		Genre.ACTION, Genre.ADVENTURE, Genre.COMEDY, Genre.FANTASY, Genre.SCIENCE_FICTION,
	]
