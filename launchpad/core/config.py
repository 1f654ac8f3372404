import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


DEFAULT_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3001",
]

DEFAULT_ORIGIN_REGEX = (
    r"^(http://(localhost|127\.0\.0\.1):\d+"
    r"|http://192\.168\.\d+\.\d+(:\d+)?"
    r"|https://[a-z0-9-]+\.netlify\.app)$"
)


def _bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _csv(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [v.strip() for v in val.split(",") if v.strip()]


def _origins(val: str | None) -> list[str]:
    # Dev origins first, then env origins; trailing slashes never match a browser Origin.
    merged = DEFAULT_DEV_ORIGINS + [o.rstrip("/") for o in _csv(val, default=[])]
    return list(dict.fromkeys(merged))


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Admin gate: empty passcode => every admin check fails
    admin_passcode: str = os.getenv("ADMIN_PASSCODE", "")

    # Document store
    store_backend: str = os.getenv("STORE_BACKEND", "sql")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./launchpad.db")

    # Redis (rate limiting only)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # CORS
    cors_allow_origins: list[str] = field(
        default_factory=lambda: _origins(
            os.getenv("ALLOW_ORIGINS") or os.getenv("ALLOW_ORIGIN")
        )
    )
    cors_allow_origin_regex: str = os.getenv(
        "CORS_ALLOW_ORIGIN_REGEX", DEFAULT_ORIGIN_REGEX
    )

    # Web client; used for the URL line of calendar exports
    frontend_url: str = os.getenv("FRONTEND_URL", "")

    ics_uid_domain: str = os.getenv("ICS_UID_DOMAIN", "launchpad-events")

    # TMDb proxy
    tmdb_api_key: str = os.getenv("TMDB_API_KEY", "")
    tmdb_base_url: str = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    tmdb_language: str = os.getenv("TMDB_LANGUAGE", "en-GB")
    tmdb_timeout_seconds: float = float(os.getenv("TMDB_TIMEOUT_SECONDS", "10"))

    # Security headers
    security_headers_enabled: bool = _bool(
        os.getenv("SECURITY_HEADERS_ENABLED"),
        default=True,
    )

    # Rate limiting
    rate_limit_enabled: bool = _bool(os.getenv("RATE_LIMIT_ENABLED"), default=True)
    rate_limit_default: str = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
    rate_limit_exempt_paths: list[str] = field(
        default_factory=lambda: _csv(
            os.getenv("RATE_LIMIT_EXEMPT_PATHS"),
            default=["/health", "/metrics"],
        )
    )


settings = Settings()
