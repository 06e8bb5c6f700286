"""Pydantic models describing the TMDB movie payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class TmdbBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Genre(TmdbBaseModel):
    id: int
    name: str


class MovieDetails(TmdbBaseModel):
    id: int
    title: str
    imdb_id: str | None = None
    overview: str = ""
    genres: list[Genre] = Field(default_factory=list[Genre])
    adult: bool = False
    release_date: str | None = None
    runtime: int | None = None
    backdrop_path: str | None = None

    _normalize_optional = field_validator(
        "imdb_id", "release_date", "backdrop_path", mode="before"
    )(_blank_to_none)

    @field_validator("overview", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("runtime", mode="before")
    @classmethod
    def _zero_runtime_is_unknown(cls, value: object) -> object:
        # TMDB reports 0 for titles without a known runtime.
        if value == 0:
            return None
        return value


class ErrorResponse(TmdbBaseModel):
    status_code: int
    status_message: str
    success: bool = False
