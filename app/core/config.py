from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "HR Compliance Matching"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://hr:hr@localhost:5432/hr_compliance"
    DATABASE_ECHO: bool = False

    # User <-> employee matching (seed values for the settings store)
    USER_MATCH_EMAIL_ENABLED: str = "true"
    USER_MATCH_EMAIL_TEMPLATE: str = "{firstName}.{lastName}"
    USER_MATCH_NAME_EXACT_ENABLED: str = "true"
    USER_MATCH_NAME_FUZZY_ENABLED: str = "true"
    USER_MATCH_NAME_FUZZY_THRESHOLD: str = "0.7"
    USER_MATCH_SUGGESTION_THRESHOLD: str = "50"

    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "development"

    # App
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
