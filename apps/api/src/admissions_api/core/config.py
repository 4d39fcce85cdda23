"""
Application Configuration

Settings are read from environment variables (and an optional .env file).
Every value has a development fallback; the admin credentials and the JWT
secret MUST be overridden before any real deployment.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"
DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Runtime configuration for the admissions API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    python_env: str = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./admissions.db"
    database_echo: bool = False

    # Tokens
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 720

    # Seeded admin account
    admin_email: str = "admin@mis.com"
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    admin_full_name: str = "Admin User"
    admin_signup_enabled: bool = True

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list (comma separated in the environment)."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def uses_default_secrets(self) -> bool:
        """True when the JWT secret or admin password still has its fallback value."""
        return (
            self.jwt_secret_key == DEFAULT_JWT_SECRET
            or self.admin_password == DEFAULT_ADMIN_PASSWORD
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
