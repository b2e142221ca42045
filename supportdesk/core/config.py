from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./supportdesk.db"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Create tables on startup instead of running alembic (local dev only)
    AUTO_CREATE_TABLES: bool = False

    # Supabase Auth + Storage
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_JWT_SECRET: Optional[str] = None
    STORAGE_BUCKET: str = "ticket-images"

    # Calendar-day filtering on the dashboard happens in this zone
    LOCAL_TIMEZONE: str = "UTC"

    BUSINESS_SEARCH_MIN_LENGTH: int = 2
    BUSINESS_SEARCH_LIMIT: int = 5
    DEFAULT_CATEGORY: str = "general"

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
