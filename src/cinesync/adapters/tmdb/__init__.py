"""TMDB enrichment adapter."""

from __future__ import annotations

from .client import TmdbClient
from .schema import Genre, MovieDetails
from .translator import release_year, translate_movie

__all__ = [
    "Genre",
    "MovieDetails",
    "TmdbClient",
    "release_year",
    "translate_movie",
]
