import os
from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from app.core.errors import ConfigurationError


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | test | staging | prod
    APP_NAME: str = "NEET PREP API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Security
    API_KEY: str = "change_me"

    # Database (required, no default)
    XATA_DATABASE_URL: str
    DB_ECHO: bool = False

    # Cache (seconds)
    CACHE_TTL_SESSION_QUESTION_LOOKUP: int = 3600
    CACHE_TTL_QUESTION: int = 3600
    CACHE_MAX_ENTRIES: int = 500

    # Rate limiting (syntaxe limits, ex: "10/minute")
    RATE_LIMIT_SESSION_QUESTION_LOOKUP: str = "10/minute"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env.local"
        case_sensitive = True
        extra = "ignore"

    @field_validator("XATA_DATABASE_URL")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("XATA_DATABASE_URL is not defined")
        return v.strip()


@lru_cache
def get_settings() -> Settings:
    env_file = os.getenv("APP_ENV_FILE", ".env.local")
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        if any(err["loc"] == ("XATA_DATABASE_URL",) for err in e.errors()):
            raise ConfigurationError("XATA_DATABASE_URL is not defined") from e
        raise ConfigurationError(str(e)) from e
