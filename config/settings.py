# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import os
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Zenetrone Attendance"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # URLs
    # origin the attendance pages are allowed to call (CSP connect-src)
    BACKEND_URL: str = "http://localhost:8000"

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = Field(default=20, ge=1, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=0, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # Security
    JWT_SECRET: str = Field(min_length=8)
    ALGORITHM: str = "HS256"
    # unset means the admin dashboard is misconfigured, not open
    ADMIN_PASSWORD: Optional[str] = None

    # Token settings
    USER_TOKEN_EXPIRE_DAYS: int = Field(default=1, ge=1, le=30)
    ATTENDANCE_TOKEN_EXPIRE_HOURS: int = Field(default=12, ge=1, le=72)

    # Cookies
    SESSION_COOKIE_NAME: str = "token"
    ADMIN_COOKIE_NAME: str = "adminAuthenticated"

    # Event
    EVENT_NAME: str = "zenetrone"

    # Attendance token reaper
    TOKEN_REAPER_ENABLED: bool = True
    TOKEN_REAPER_INTERVAL_SECONDS: int = Field(default=60, ge=5)

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_secrets(cls, v):
        """Ensure secrets are strong enough"""
        if len(v) < 32:
            import warnings
            warnings.warn(f"Secret key is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format"""
        if not v.startswith(("postgresql://", "postgresql+psycopg2://", "sqlite://")):
            raise ValueError("Unsupported database URL format")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv("ENVIRONMENT", "development")
        if environment == "production" and "*" in v:
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
