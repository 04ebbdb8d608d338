from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so the shared booking-admin .env can be reused.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Hotel Booking Analytics"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")
    supabase_timeout_seconds: float = Field(default=30.0, alias="SUPABASE_TIMEOUT_SECONDS")
    supabase_page_size: int = Field(default=1000, alias="SUPABASE_PAGE_SIZE", ge=1)

    analytics_trend_window_days: int = Field(default=30, alias="ANALYTICS_TREND_WINDOW_DAYS", ge=1)
    analytics_strict_filters: bool = Field(default=False, alias="ANALYTICS_STRICT_FILTERS")
    analytics_admin_token: Optional[str] = Field(default=None, alias="ANALYTICS_ADMIN_TOKEN")
    report_currency: str = Field(default="SAR", alias="REPORT_CURRENCY")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
