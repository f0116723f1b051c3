"""
Centralized configuration for the Garage Console backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, EMPLOYEE_*).
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
    app_name: str = "Garage Console API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # Console sessions
    console_session_cookie: str = "garage_console_session"
    shadow_session_storage_key: str = "garage_shadow_user"
    sign_out_timeout_seconds: float = 3.0
    console_session_idle_ttl_seconds: float = 1800.0
    identity_connectivity_error: str = "Error de conexión con el servicio de identidad."

    # Profile fallback used when the profiles row is missing
    fallback_profile_role: str = "owner"
    fallback_profile_full_name: str = "Usuario"

    # Employee accounts
    employee_min_username_length: int = 3
    employee_min_password_length: int = 4


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
