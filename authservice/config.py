"""
Configuration management.
Simple .env based config, read once at startup.
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SESSION_SECRET = "dev_secret_change_me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
    
    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "ENVIRONMENT"),
    )
    
    # Security
    session_secret: str = Field(
        default=DEFAULT_SESSION_SECRET,
        validation_alias=AliasChoices("SESSION_SECRET", "JWT_SECRET"),
    )
    session_max_age: int = Field(default=24 * 60 * 60, ge=60)  # seconds
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)
    min_password_length: int = Field(default=6, ge=1)
    
    # Logging
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Session cookies require HTTPS only in production."""
        return self.environment.strip().lower() == "production"


# Global settings instance
settings = Settings()
