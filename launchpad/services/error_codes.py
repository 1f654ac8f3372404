from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    MISSING_SCHEDULE = "MISSING_SCHEDULE"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
