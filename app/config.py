"""
Load settings from .env. Never log or expose secret values.
All values come from environment variables (populated via .env file).
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tools.google_client import GOOGLE_SEARCH_URL
from tools.rate_limiter import DEFAULT_PER_DAY, DEFAULT_PER_SECOND


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Google Custom Search -- both required, no hardcoded credentials
    google_api_key: str = Field(min_length=1, description="Google API key")
    google_cse_id: str = Field(min_length=1, description="Google Programmable Search Engine ID (cx)")
    google_search_url: str = Field(default=GOOGLE_SEARCH_URL, description="Custom Search JSON API endpoint")
    http_timeout: Optional[float] = Field(default=None, description="Upstream timeout in seconds (none by default)")

    # Local quota guard; free tier allows 100 queries per day
    rate_limit_per_second: int = Field(default=DEFAULT_PER_SECOND, ge=1, description="Max upstream calls per second")
    rate_limit_per_day: int = Field(default=DEFAULT_PER_DAY, ge=1, description="Max upstream calls per day")

    # App
    log_level: str = Field(default="INFO", description="Log level")
    server_name: str = Field(default="google-search", description="MCP server name")
    server_version: str = Field(default="0.1.0", description="MCP server version")


@lru_cache
def get_settings() -> Settings:
    return Settings()
