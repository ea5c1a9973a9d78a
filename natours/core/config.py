"""Application configuration"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Natours"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Tour booking API with reviews and ratings"

    # Security
    SECRET_KEY: str = Field(...)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=90 * 24 * 60)
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = Field(default=12)

    # Password lifecycle
    PASSWORD_MIN_LENGTH: int = Field(default=8)
    PASSWORD_MAX_BYTES: int = Field(default=72)  # bcrypt ignores anything longer
    PASSWORD_RESET_EXPIRE_MINUTES: int = Field(default=120)
    PASSWORD_CHANGE_SKEW_SECONDS: int = Field(default=1)  # backdates passwordChangedAt

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./natours.db")

    # Email SMTP Configuration (empty host disables delivery)
    SMTP_HOST: str = Field(default="")
    SMTP_PORT: int = Field(default=587)
    SMTP_USERNAME: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")
    SMTP_USE_TLS: bool = Field(default=True)
    FROM_EMAIL: str = Field(default="noreply@natours.io")
    FROM_NAME: str = Field(default="Natours")

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000"])

    # Application URLs
    FRONTEND_URL: str = Field(default="http://localhost:3000")

    # Development
    DEBUG: bool = Field(default=False)
    TESTING: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()
