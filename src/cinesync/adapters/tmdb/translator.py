"""Translate TMDB payloads into enrichment metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cinesync.domain.model import EnrichedMetadata

if TYPE_CHECKING:
    from .schema import MovieDetails


def release_year(release_date: str | None) -> int | None:
    """Return the year from a ``YYYY-MM-DD`` date, if it has one."""

    if not release_date:
        return None
    head = release_date.split("-", 1)[0]
    return int(head) if head.isdigit() else None


def translate_movie(movie: MovieDetails, *, image_base_url: str) -> EnrichedMetadata:
    backdrop_url = (
        f"{image_base_url.rstrip('/')}{movie.backdrop_path}" if movie.backdrop_path else None
    )
    return EnrichedMetadata(
        title=movie.title,
        overview=movie.overview,
        genres=tuple(genre.name for genre in movie.genres),
        adult=movie.adult,
        release_year=release_year(movie.release_date),
        runtime_minutes=movie.runtime,
        backdrop_url=backdrop_url,
    )
