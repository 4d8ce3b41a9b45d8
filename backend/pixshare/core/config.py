"""
Core configuration for PixShare.
Loads settings from environment variables.
"""
from datetime import timedelta
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "PixShare"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 4000
    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_URL: str = "http://localhost:4000"

    # Database
    DATABASE_URL: str
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10

    # JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7
    AUTH_COOKIE_NAME: str = "jwt_token"

    # Google OAuth
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_AUTH_URL: str = "https://accounts.google.com/o/oauth2/auth"
    GOOGLE_TOKEN_URL: str = "https://oauth2.googleapis.com/token"
    GOOGLE_USERINFO_URL: str = "https://www.googleapis.com/oauth2/v2/userinfo"

    # Storage Provider
    STORAGE_PROVIDER: str = "s3"

    # S3 Compatible (R2, AWS, MinIO)
    S3_ENDPOINT_URL: str = ""
    S3_ACCESS_KEY_ID: str = ""
    S3_SECRET_ACCESS_KEY: str = ""
    S3_BUCKET_NAME: str = ""
    S3_REGION_NAME: str = "auto"
    S3_PUBLIC_URL_BASE: str = ""  # e.g. a CDN or r2.dev domain in front of the bucket

    # Uploads
    STORAGE_PATH_PREFIX: str = "pixshare"
    MAX_FILE_SIZE_MB: int = 5

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def allowed_origins_list(self) -> List[str]:
        """FRONTEND_URL may hold several comma-separated origins."""
        return [origin.strip() for origin in self.FRONTEND_URL.split(",") if origin.strip()]

    @property
    def frontend_base_url(self) -> str:
        return self.allowed_origins_list[0].rstrip("/")

    @property
    def google_redirect_uri(self) -> str:
        return f"{self.BACKEND_URL.rstrip('/')}/auth/google/callback"

    @property
    def credential_ttl(self) -> timedelta:
        return timedelta(days=self.JWT_EXPIRE_DAYS)

    @property
    def max_file_size_bytes(self) -> int:
        """Convert max file size to bytes."""
        return self.MAX_FILE_SIZE_MB * 1024 * 1024


settings = Settings()
