import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from launchpad.api.errors import store_error_handler
from launchpad.api.router import router as api_router
from launchpad.api.routes.movies import router as movies_router
from launchpad.auth.deps import ADMIN_HEADER
from launchpad.core.config import settings
from launchpad.core.logging import configure_logging
from launchpad.middleware.rate_limit import RateLimitMiddleware
from launchpad.middleware.request_id import RequestIdMiddleware
from launchpad.middleware.security_headers import SecurityHeadersMiddleware
from launchpad.services.error_codes import ErrorCode
from launchpad.store import StoreError

configure_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(title="Launchpad Events API")

# Starlette runs the LAST added middleware FIRST (outermost).
# We want:
# - RequestId + SecurityHeaders to apply even to CORS preflight + rate limit responses
# - CORS to handle preflight properly
# - RateLimit to be closest to the app (innermost)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_origin_regex=settings.cors_allow_origin_regex or None,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", ADMIN_HEADER],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)

Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

app.add_exception_handler(StoreError, store_error_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body") or "body",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": {
                "code": ErrorCode.VALIDATION_FAILED.value,
                "message": "invalid request",
                "errors": errors,
            }
        },
    )


@app.get("/")
def root():
    return {"name": "Launchpad Events API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(api_router)

if settings.tmdb_api_key.strip():
    app.include_router(movies_router)
else:
    logger.warning("tmdb_disabled", reason="TMDB_API_KEY not set")
