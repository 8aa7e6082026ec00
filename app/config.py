"""
Configuration management.
Simple .env based config, read once at process start.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Development fallback only. Anyone who knows it can forge sessions.
DEFAULT_SESSION_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "development"  # "production" enables Secure cookies

    # Security
    session_secret: str = DEFAULT_SESSION_SECRET
    session_ttl_seconds: int = 10 * 60
    session_refresh_threshold_seconds: int = 2 * 60

    # Fixed demo credentials
    admin_username: str = "admin"
    admin_password: str = "password"
    admin_password_hash: str = ""  # bcrypt hash, takes precedence when set
    admin_display_name: str = "Admin"

    # Flash messages
    flash_max_age_seconds: int = 60
    flash_max_entries: int = 10

    # Logging
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def uses_default_secret(self) -> bool:
        return self.session_secret == DEFAULT_SESSION_SECRET


# Global settings instance
settings = Settings()
