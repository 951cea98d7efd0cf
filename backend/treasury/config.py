"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "Apartment Treasury API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # --- Storage ---
    STORAGE_BACKEND: str = "memory"   # memory | sql
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'treasury.db'}"

    # --- Security ---
    # Empty SECRET_KEY means a random per-process key is generated at first use.
    SECRET_KEY: str = ""
    TOKEN_EXPIRY_HOURS: int = 24
    ADMIN_ID: str = "admin-1"
    ADMIN_NAME: str = "Apartment Treasurer"
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""

    # --- Collections ---
    TOTAL_FLATS: int = 40               # 5 floors x 8 flats
    MAINTENANCE_PER_FLAT: float = 5000  # INR per flat per month

    # --- Uploads ---
    UPLOAD_DIR: str = str(BASE_DIR / "uploads")
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    ALLOWED_UPLOAD_TYPES: list[str] = ["image/jpeg", "image/png", "application/pdf"]

    # --- Misc ---
    PING_MESSAGE: str = "ping"

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
