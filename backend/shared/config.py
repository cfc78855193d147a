"""
Centralized configuration for the All Access Artist backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., STRIPE_*, SUPABASE_*, RATE_LIMIT_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "All Access Artist API"
    app_version: str = "2.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Rate limiting (windows in milliseconds)
    rate_limit_enabled: bool = True
    rate_limit_global_max_requests: int = 1000
    rate_limit_global_window_ms: int = 60_000
    rate_limit_user_max_requests: int = 100
    rate_limit_user_window_ms: int = 60_000
    rate_limit_cleanup_interval_ms: int = 300_000
    rate_limit_rpc_name: str = "check_rate_limit"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""  # direct Postgres URI, only used by run_migrations.py

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_price_id: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"
    upgrade_url: str = "/profile?tab=pay"

    # Onboarding
    onboarding_token_ttl_hours: int = 24


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
