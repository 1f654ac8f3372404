from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

import httpx
import pydantic
import structlog

from launchpad.api.schemas.movies import (
    MovieOut,
    MovieSearchOut,
    MovieSummaryOut,
    TmdbMovie,
    TmdbSearch,
)
from launchpad.core.config import settings
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import NotFoundError, UpstreamError

logger = structlog.get_logger(__name__)

_URL_TAIL = re.compile(r"https?://.*", re.IGNORECASE)


def clean_api_key(raw: str | None) -> str:
    """Trim the key and drop anything pasted after it (URLs, stray words)."""
    stripped = _URL_TAIL.sub("", (raw or "").strip())
    parts = stripped.split()
    return parts[0] if parts else ""


def uses_bearer(key: str) -> bool:
    # v4 read tokens are JWTs
    return len(key) > 20 and key.startswith("eyJ")


class TmdbClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-GB",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._key = clean_api_key(api_key)
        self._language = language

        headers: dict[str, str] = {"Accept": "application/json"}
        params: dict[str, str] = {}
        if uses_bearer(self._key):
            headers["Authorization"] = f"Bearer {self._key}"
        elif self._key:
            params["api_key"] = self._key

        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            params=params,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        try:
            response = self._http.get(path, params={"language": self._language, **params})
        except httpx.HTTPError as exc:
            logger.error("tmdb_request_failed", path=path, error=str(exc))
            raise UpstreamError(ErrorCode.UPSTREAM_FAILURE.value, "movie lookup failed") from exc

        if response.status_code == 404:
            raise NotFoundError(ErrorCode.MOVIE_NOT_FOUND.value, "movie not found")
        if response.is_error:
            logger.error(
                "tmdb_request_failed",
                path=path,
                status=response.status_code,
                body=response.text[:500],
            )
            raise UpstreamError(ErrorCode.UPSTREAM_FAILURE.value, "movie lookup failed")

        try:
            return response.json()
        except ValueError as exc:
            logger.error("tmdb_request_failed", path=path, error="invalid json")
            raise UpstreamError(ErrorCode.UPSTREAM_FAILURE.value, "movie lookup failed") from exc

    def search(self, query: str) -> MovieSearchOut:
        q = (query or "").strip()
        if not q:
            return MovieSearchOut(results=[])

        raw = self._get("/search/movie", {"query": q, "page": 1})
        try:
            data = TmdbSearch.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.error("tmdb_request_failed", path="/search/movie", error=str(exc))
            raise UpstreamError(ErrorCode.UPSTREAM_FAILURE.value, "movie lookup failed") from exc

        return MovieSearchOut(
            results=[
                MovieSummaryOut(
                    id=hit.id,
                    title=hit.title,
                    release_date=hit.release_date,
                    poster_path=hit.poster_path,
                )
                for hit in data.results
            ]
        )

    def movie(self, movie_id: int) -> MovieOut:
        path = f"/movie/{movie_id}"
        raw = self._get(path, {})
        try:
            data = TmdbMovie.model_validate(raw)
        except pydantic.ValidationError as exc:
            logger.error("tmdb_request_failed", path=path, error=str(exc))
            raise UpstreamError(ErrorCode.UPSTREAM_FAILURE.value, "movie lookup failed") from exc

        return MovieOut(
            id=data.id,
            title=data.title,
            overview=data.overview or "",
            runtime=data.runtime,
            release_date=data.release_date,
            poster_path=data.poster_path,
            genres=[genre.name for genre in data.genres],
        )


@lru_cache(maxsize=1)
def get_tmdb_client() -> TmdbClient:
    return TmdbClient(
        api_key=settings.tmdb_api_key,
        base_url=settings.tmdb_base_url,
        language=settings.tmdb_language,
        timeout=settings.tmdb_timeout_seconds,
    )
