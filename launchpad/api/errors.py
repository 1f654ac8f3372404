import structlog
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import (
    InvalidReferenceError,
    MissingScheduleError,
    NotFoundError,
    PermissionDeniedError,
    PolicyViolationError,
    ServiceError,
    ValidationError,
)
from launchpad.store.base import StoreError

logger = structlog.get_logger(__name__)

_CLIENT_ERRORS = (
    ValidationError,
    InvalidReferenceError,
    PolicyViolationError,
    MissingScheduleError,
)


def http_error_from_service(err: ServiceError) -> HTTPException:
    if isinstance(err, NotFoundError):
        status = 404
    elif isinstance(err, PermissionDeniedError):
        status = 403
    elif isinstance(err, _CLIENT_ERRORS):
        status = 400
    else:
        status = 500

    if status == 500:
        return HTTPException(
            status_code=status,
            detail={"code": err.code, "message": "internal server error"},
        )

    detail = {"code": err.code, "message": err.message}
    if isinstance(err, ValidationError):
        detail["errors"] = [e.as_dict() for e in err.errors]
    return HTTPException(status_code=status, detail=detail)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "store_error",
        method=request.method,
        path=request.url.path,
        error=str(exc.__cause__ or exc),
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "code": ErrorCode.UPSTREAM_FAILURE.value,
                "message": "internal server error",
            }
        },
    )
