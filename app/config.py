"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List

# Used only when JWT_SECRET is unset outside production
DEV_JWT_SECRET = "inventory-development-secret"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Database Configuration
    # Empty DATABASE_URL keeps everything in a local SQLite file
    database_url: str = ""
    sqlite_path: str = "data/inventory.db"

    # Token Configuration
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24

    # Password hashing cost
    bcrypt_rounds: int = 10

    # CORS (comma separated, only applied in production)
    cors_origins: str = ""

    # Rate Limiting
    rate_limit_login_per_minute: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def use_postgres(self) -> bool:
        """PostgreSQL is selected by a postgres:// or postgresql:// URL."""
        return self.database_url.startswith(("postgres://", "postgresql://"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def signing_secret(self) -> str:
        """Secret used to sign access tokens."""
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_production:
            raise ValueError("JWT_SECRET must be set in production")
        return DEV_JWT_SECRET


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
