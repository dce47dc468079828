"""Application settings and configuration helpers."""
from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(
        default="sqlite+aiosqlite:///./caja.db", alias="DATABASE_URL"
    )
    secret_key: str = Field(default="change-me", alias="JWT_SECRET")
    access_token_expires_minutes: int = Field(default=60 * 24 * 7)
    environment: str = Field(default="development", alias="APP_ENV")
    cookie_name: str = "access_token"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    allow_registration: bool = True
    log_level: str = "INFO"
    port: int = 3001

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds, aligned with the token expiry."""

        return self.access_token_expires_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    defaults = Settings.model_fields
    origins = os.getenv("CORS_ORIGINS")
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults["database_url"].default),
        secret_key=os.getenv("JWT_SECRET", defaults["secret_key"].default),
        access_token_expires_minutes=int(
            os.getenv(
                "ACCESS_TOKEN_EXPIRES_MINUTES",
                defaults["access_token_expires_minutes"].default,
            )
        ),
        environment=os.getenv("APP_ENV", defaults["environment"].default),
        cors_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins
            else ["http://localhost:5173"]
        ),
        allow_registration=_env_bool("ALLOW_REGISTRATION", True),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default).upper(),
        port=int(os.getenv("PORT", defaults["port"].default)),
    )
