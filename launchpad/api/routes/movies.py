from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from launchpad.api.errors import http_error_from_service
from launchpad.api.schemas.movies import MovieOut, MovieSearchOut
from launchpad.services.exceptions import ServiceError
from launchpad.services.movies_service import TmdbClient, get_tmdb_client

router = APIRouter(prefix="/tmdb", tags=["movies"])

Tmdb = Annotated[TmdbClient, Depends(get_tmdb_client)]


@router.get("/search", response_model=MovieSearchOut)
def search_movies(tmdb: Tmdb, query: str = Query(default="")):
    try:
        return tmdb.search(query)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.get("/movie/{movie_id}", response_model=MovieOut)
def get_movie(tmdb: Tmdb, movie_id: int = Path(ge=1)):
    try:
        return tmdb.movie(movie_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
