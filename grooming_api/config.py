# grooming_api/config.py

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_DATABASE_URL = "sqlite:///./grooming.db"
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(hours=24)


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str
    port: int = 3000
    environment: str = "development"
    admin_email: str = "admin@toelettatura.com"
    admin_password: str = "admin123"
    db_timeout_seconds: int = 10
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _normalise_database_url(url: str) -> str:
    # Heroku-style URLs are not accepted by SQLAlchemy
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def load_settings() -> Settings:
    """Build the process-wide settings from the environment.

    There is no fallback signing secret: a missing JWT_SECRET stops startup.
    """
    load_dotenv(dotenv_path=env_path)

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret:
        raise ConfigError("JWT_SECRET is not set")

    try:
        port = int(os.getenv("PORT", "3000"))
        timeout = int(os.getenv("DB_TIMEOUT_SECONDS", "10"))
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc

    return Settings(
        database_url=_normalise_database_url(os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)),
        jwt_secret=jwt_secret,
        port=port,
        environment=os.getenv("APP_ENV", "development"),
        admin_email=os.getenv("ADMIN_EMAIL", "admin@toelettatura.com"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        db_timeout_seconds=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
