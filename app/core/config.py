from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PROJECT_NAME: str = "Portfolio Blog API"
    API_PREFIX: str = "/api"

    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DB_NAME: str = "portfolio_blog"

    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Derived summaries and list previews
    SUMMARY_MAX_LENGTH: int = 300
    PREVIEW_MAX_LENGTH: int = 160

    # Insert attempts before a slug conflict is reported to the client
    SLUG_MAX_RETRIES: int = 5
    # Reject titles without a single letter or digit instead of storing "-1", "-2", ...
    REJECT_EMPTY_SLUG: bool = True

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
