"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./journal.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]  # Next.js dev server

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440  # 24 hours

    # IANA zone used for entry hour, day of week and same-day trade numbering
    timezone: str = "UTC"

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}


settings = Settings()
