"""
Export module.
Renders a slice of movies as pretty text, JSON, XML or CSV.
"""

import csv  # delimited output
import io  # in-memory text buffers
import json  # JSON output
import xml.etree.ElementTree as ET  # tree markup output
from typing import Optional, Sequence  # type hints

from loguru import logger  # console logging

from .models import ExportFormat, Movie  # record and format vocabulary
from .schemas import MovieOut  # serialized movie shape

CSV_HEADER = ["Title", "Year", "Rating", "Directors", "Genres", "Castings", "Comments", "CommunityRating"]
LIST_SEPARATOR = "; "  # joins list cells in CSV

CONTENT_TYPES = {
	ExportFormat.JSON: ("application/json", "movies.json"),
	ExportFormat.XML: ("application/xml", "movies.xml"),
	ExportFormat.CSV: ("text/csv", "movies.csv"),
	ExportFormat.PRETTY: ("text/plain", "movies.txt"),
}


def _joined(values, fallback: str = "Unknown") -> str:
	return ", ".join(values) if values else fallback


def format_single_movie(movie: Movie) -> str:
	"""Human-readable block for one movie."""
	lines = [
		"",
		f"Title: {movie.title}",
		f"Year: {movie.year}",
		f"Rating: {movie.rating}",
		f"Directors: {_joined(movie.directors)}",
		f"Genres: {_joined([g.label for g in movie.genres])}",
		f"Cast: {_joined(movie.castings)}",
	]
	if movie.comments:
		lines.append("Comments:")
		lines.extend(f"  - {comment}" for comment in movie.comments)
	lines.append(
		f"Community Rating: {movie.community_rating:.1f} (Total ratings: {len(movie.community_ratings)})"
	)
	return "\n".join(lines) + "\n"


def format_movie_list(movies: Sequence[Movie]) -> str:
	return "".join(format_single_movie(m) + "-------------------\n" for m in movies)


def to_json(movies: Sequence[Movie]) -> str:
	return json.dumps([MovieOut.from_movie(m).model_dump() for m in movies], indent=2, ensure_ascii=False)


def to_xml(movies: Sequence[Movie]) -> str:
	"""<movies><movie>...</movie></movies>, one child element per field."""
	root = ET.Element("movies")
	for movie in movies:
		node = ET.SubElement(root, "movie")
		for key, value in MovieOut.from_movie(movie).model_dump().items():
			child = ET.SubElement(node, key)
			if isinstance(value, list):
				for item in value:
					ET.SubElement(child, key.rstrip('s') or "item").text = str(item)
			else:
				child.text = str(value)
	ET.indent(root)
	return ET.tostring(root, encoding="unicode")


def to_csv(movies: Sequence[Movie]) -> str:
	buffer = io.StringIO()
	writer = csv.writer(buffer, lineterminator="\n")
	writer.writerow(CSV_HEADER)
	for movie in movies:
		writer.writerow([
			movie.title,
			movie.year,
			f"{movie.rating:.1f}",
			LIST_SEPARATOR.join(movie.directors),
			LIST_SEPARATOR.join(g.name for g in movie.genres),
			LIST_SEPARATOR.join(movie.castings),
			LIST_SEPARATOR.join(movie.comments),
			f"{movie.community_rating:.1f}",
		])
	return buffer.getvalue()


WRITERS = {
	ExportFormat.PRETTY: format_movie_list,
	ExportFormat.JSON: to_json,
	ExportFormat.XML: to_xml,
	ExportFormat.CSV: to_csv,
}


def write(movies: Sequence[Movie], fmt: Optional[ExportFormat] = None) -> str:
	"""Render movies in fmt (PRETTY when None)."""
	fmt = fmt or ExportFormat.PRETTY
	output = WRITERS[fmt](movies)
	logger.info(f"[Formatter] Rendered {len(movies)} movies as {fmt.name}")
	return output
