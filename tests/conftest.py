"""
Shared fixtures: a small hand-built catalog and a session over it.
"""

from typing import List

import pytest

from moviefeaster.models import Genre, Movie
from moviefeaster.session import CatalogSession


def make_catalog() -> List[Movie]:
	"""Fresh movies on every call so mutation tests stay isolated."""
	return [
		Movie(
			movie_id=603,
			title="The Matrix",
			directors=["Lana Wachowski", "Lilly Wachowski"],
			year=1999,
			rating=8.7,
			genres=[Genre.ACTION, Genre.SCIENCE_FICTION],
			overview="A hacker learns the truth about reality.",
			castings=["Keanu Reeves", "Carrie-Anne Moss"],
		),
		Movie(
			movie_id=27205,
			title="Inception",
			directors=["Christopher Nolan"],
			year=2010,
			rating=8.8,
			genres=[Genre.ACTION, Genre.SCIENCE_FICTION, Genre.ADVENTURE],
			overview="A thief steals secrets through dreams.",
			castings=["Leonardo DiCaprio", "Elliot Page"],
		),
		Movie(
			movie_id=346698,
			title="Barbie",
			directors=["Greta Gerwig"],
			year=2023,
			rating=7.1,
			genres=[Genre.COMEDY, Genre.ADVENTURE, Genre.FANTASY],
			overview="Barbie leaves Barbieland.",
			castings=["Margot Robbie", "Ryan Gosling"],
		),
	]


def titles(movies) -> List[str]:
	return [m.title for m in movies]


@pytest.fixture
def catalog() -> List[Movie]:
	return make_catalog()


@pytest.fixture
def session(catalog) -> CatalogSession:
	return CatalogSession(lambda: catalog)
