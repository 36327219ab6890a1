import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    jwt_secret: str
    jwt_expires_days: int

    api_prefix: str
    cors_origin: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getenv_int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer (got {raw!r}).")


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_getenv("DATABASE_URL", "sqlite:///campushub.db"),
        jwt_secret=_getenv("JWT_SECRET", "change-me"),
        jwt_expires_days=_getenv_int("JWT_EXPIRES_DAYS", 30),
        api_prefix=_getenv("API_PREFIX", "/api").rstrip("/"),
        cors_origin=_getenv("CORS_ORIGIN", "http://localhost:5173"),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "JWT_SECRET": s.jwt_secret,
        "JWT_EXPIRES_DAYS": s.jwt_expires_days,
        "API_PREFIX": s.api_prefix,
        "CORS_ORIGIN": s.cors_origin,
        # JSON bodies only; image URLs are stored as plain strings
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }


def is_production(env: str | None) -> bool:
    return (env or "").strip().lower() in ("prod", "production")
