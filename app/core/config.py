from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
import os
from pathlib import Path
from typing import List


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Config(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database Configuration (async drivers: aiosqlite or asyncpg)
    database_url: str = Field(
        default=f"sqlite+aiosqlite:///{PROJECT_ROOT}/data/analytics.db",
        alias="DATABASE_URL",
    )

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # NL-to-SQL (Vanna) service
    vanna_api_base_url: str = Field(
        default="http://localhost:8000", alias="VANNA_API_BASE_URL"
    )
    vanna_api_key: str = Field(default="", alias="VANNA_API_KEY")
    vanna_timeout_seconds: float = Field(default=60.0, alias="VANNA_TIMEOUT_SECONDS")

    # Rate limiting for /api/ routes
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_max_requests: int = Field(default=100, alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_window_seconds: int = Field(
        default=15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS"
    )

    # Seeder input
    seed_data_path: str = Field(
        default="data/Analytics_Test_Data.json", alias="SEED_DATA_PATH"
    )

    is_production: bool = (
        os.getenv("ENVIRONMENT", "development").lower() == "production"
    )


# Instantiate the settings
config = Config()
