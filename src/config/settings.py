"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # Supabase (optional in test, where the client is replaced)
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""

    # JWT
    JWT_SECRET: str = Field(min_length=10)
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Password hashing
    BCRYPT_ROUNDS: int = Field(12, ge=4, le=31)

    # CORS
    CORS_ORIGINS: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"

    # Login/register throttling, per client IP
    AUTH_THROTTLE_LIMIT: int = 5
    AUTH_THROTTLE_WINDOW_SECONDS: float = 15.0

    # Messages
    MESSAGES_DEFAULT_LIMIT: int = Field(30, ge=1, le=100)

    @model_validator(mode="after")
    def require_database(self) -> "Settings":
        if self.ENVIRONMENT != "test" and not (self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY):
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required outside the test environment")
        return self

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
