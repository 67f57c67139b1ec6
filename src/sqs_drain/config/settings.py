"""
Module: settings.py
Description: Client configuration using pydantic-settings.

Loads AWS connection and logging settings from environment variables
prefixed with SQS_DRAIN_. Supports .env files for local development.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_REGION


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_DRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: str = Field(default=DEFAULT_REGION, description="AWS region")
    sqs_endpoint_url: Optional[str] = Field(
        default=None,
        description="Override SQS endpoint (LocalStack, moto server)"
    )

    @field_validator('aws_region')
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate region is a non-empty string."""
        if not v or not v.strip():
            raise ValueError("aws_region must be a non-empty string")
        return v.strip()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()
