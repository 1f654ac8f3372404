from launchpad.api.schemas.events import DeletedOut, EventCreate, EventOut, PriceType
from launchpad.api.schemas.movies import MovieOut, MovieSearchOut, MovieSummaryOut
from launchpad.api.schemas.signups import SignupCreate, SignupOut

__all__ = [
    "EventCreate",
    "EventOut",
    "DeletedOut",
    "PriceType",
    "SignupCreate",
    "SignupOut",
    "MovieOut",
    "MovieSearchOut",
    "MovieSummaryOut",
]
