from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from launchpad.api.schemas.events import SchemaBase


class TmdbGenre(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str


class TmdbMovie(BaseModel):
    """Upstream /movie/{id} payload; snake_case as TMDb sends it."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    overview: str | None = ""
    runtime: int | None = None
    release_date: str | None = None
    poster_path: str | None = None
    genres: list[TmdbGenre] = Field(default_factory=list)


class TmdbSearchHit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    release_date: str | None = None
    poster_path: str | None = None


class TmdbSearch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[TmdbSearchHit] = Field(default_factory=list)


class MovieSummaryOut(SchemaBase):
    id: int
    title: str
    release_date: str | None = None
    poster_path: str | None = None


class MovieSearchOut(SchemaBase):
    results: list[MovieSummaryOut] = Field(default_factory=list)


class MovieOut(SchemaBase):
    id: int
    title: str
    overview: str = ""
    runtime: int | None = None
    release_date: str | None = None
    poster_path: str | None = None
    genres: list[str] = Field(default_factory=list)
