"""
Pydantic schemas shared by the exporters and the HTTP API.
"""

from typing import List  # list types

from pydantic import BaseModel  # response schema definitions

from .models import Movie  # catalog record


class MovieOut(BaseModel):
	id: int  # catalog id
	title: str  # display title
	year: int  # release year, 0 when unknown
	rating: float  # critic/upstream score
	directors: List[str]  # director names
	castings: List[str]  # cast names
	genres: List[str]  # genre enum names
	overview: str = ""  # synopsis; may be blank after an update
	img_url: str = ""  # poster URL
	comments: List[str] = []  # user comments
	community_rating: float = 0.0  # mean of user ratings
	community_rating_count: int = 0  # number of user ratings

	@classmethod
	def from_movie(cls, movie: Movie) -> "MovieOut":
		data = movie.to_dict()
		data['overview'] = data['overview'] or ""  # overview updates accept None
		return cls(**data)


class CatalogStatsOut(BaseModel):
	movie_count: int  # records in the catalog
	genres: List[str]  # genre names present, by name
	directors: List[str]  # unique director names, sorted
	actors: List[str]  # unique cast names, sorted
