from launchpad.repositories.events import EventRepository
from launchpad.repositories.signups import SignupRepository
from launchpad.repositories.timestamps import coerce_timestamp, to_iso

__all__ = ["EventRepository", "SignupRepository", "coerce_timestamp", "to_iso"]
