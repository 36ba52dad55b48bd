# app/config/settings.py
# Application configuration loaded from the environment

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SECRET_KEY = "change-me-in-production"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Environment driven settings for the task backend"""

    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tasks.db")
    DB_SSLMODE = os.getenv("DB_SSLMODE")

    # Session tokens
    SECRET_KEY = os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY)
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", 15))

    # Session cookie (outlives the token it carries)
    COOKIE_NAME = os.getenv("COOKIE_NAME", "token")
    COOKIE_MAX_AGE_DAYS = int(os.getenv("COOKIE_MAX_AGE_DAYS", 30))
    COOKIE_SECURE = _as_bool(os.getenv("COOKIE_SECURE", "true"))
    COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "none")

    # Pagination
    DEFAULT_PAGE_LIMIT = 10
    MAX_PAGE_LIMIT = 100

    # Server
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    RELOAD = _as_bool(os.getenv("RELOAD", "true"))

    # Seed admin created by create_tables.py
    DEFAULT_ADMIN_NAME = os.getenv("DEFAULT_ADMIN_NAME", "Admin")
    DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL")
    DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD")

    @property
    def cookie_max_age_seconds(self) -> int:
        return self.COOKIE_MAX_AGE_DAYS * 24 * 60 * 60

    def validate(self):
        """Refuse to run outside development with the placeholder secret"""
        if self.ENVIRONMENT != "development" and self.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise ValueError(
                "SECRET_KEY must be set to a secure value when ENVIRONMENT "
                f"is '{self.ENVIRONMENT}'"
            )
        return self


settings = Settings().validate()
