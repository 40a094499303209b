"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./table_plan.db")
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")

    # Table naming
    ROOM_SECTION_NAME: str = os.getenv("ROOM_SECTION_NAME", "room section")
    ROOM_TABLE_PREFIX: str = os.getenv("ROOM_TABLE_PREFIX", "ROOM")

    # One create-batch at a time per section (in-process only)
    SERIALIZE_SECTION_BATCHES: bool = os.getenv("SERIALIZE_SECTION_BATCHES", "true").lower() in ("1", "true", "yes")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
