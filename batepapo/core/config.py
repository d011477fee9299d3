import os
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "batepapo"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    MIGRATE_ON_START: bool = True

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./batepapo.db"

    # Network
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    # Presence
    INACTIVITY_TIMEOUT_SECONDS: int = 10
    SWEEP_INTERVAL_SECONDS: int = 15
    SWEEP_ENABLED: bool = True

    # Messages
    BROADCAST_NAME: str = "Todos"
    TIME_FORMAT: str = "%H:%M:%S"

    class Config:
        case_sensitive = True
        # Load .env ONLY when not production
        env_file = ".env" if os.getenv("ENVIRONMENT") != "production" else None


settings = Settings()
