from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ServiceError(Exception):
    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or code
        super().__init__(self.message)


class NotFoundError(ServiceError):
    pass


class PermissionDeniedError(ServiceError):
    pass


class ValidationError(ServiceError):
    def __init__(
        self,
        code: str,
        message: str | None = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        super().__init__(code, message)
        self.errors = list(errors or [])


class InvalidReferenceError(ServiceError):
    pass


class PolicyViolationError(ServiceError):
    pass


class MissingScheduleError(ServiceError):
    pass


class UpstreamError(ServiceError):
    pass
