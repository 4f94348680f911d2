"""
Core configuration for the Sandwich API
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Configuration
    API_PREFIX: str = "/api"
    SECRET_KEY: str = "dev-secret-key-change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    MFA_TOKEN_EXPIRE_MINUTES: int = 5

    # Database Configuration
    DOCKER_DB_CONNECTION: Optional[str] = None  # full SQL Server schema
    SQLITE_URL: str = "sqlite:///./sandwich.db"  # SQLite fallback with generic options table
    CATALOG_BACKEND: Optional[str] = None  # "tables" or "options"
    SEED_SAMPLE_DATA: bool = True

    # CORS Configuration
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:4200",  # Angular dev server
    ]

    # Email Configuration (welcome emails)
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USE_TLS: bool = True
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_ADDRESS: str = "no-reply@example.com"
    SMTP_FROM_NAME: str = "The Sandwich"
    PUBLIC_URL: str = "http://localhost:4200"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        return self.DOCKER_DB_CONNECTION or self.SQLITE_URL

    @property
    def catalog_backend(self) -> str:
        if self.CATALOG_BACKEND:
            return self.CATALOG_BACKEND
        return "tables" if self.DOCKER_DB_CONNECTION else "options"

    @property
    def uses_fallback_db(self) -> bool:
        return not self.DOCKER_DB_CONNECTION


# Global settings instance
settings = Settings()
