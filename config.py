"""Configuration management for URL shortener."""

from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        le=1,
        description="Number of uvicorn worker processes. Links live in process memory, so only 1 is supported."
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL used for short links when the request carries no host"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )

    max_collision_retries: int = Field(
        default=1000,
        ge=1,
        description="Random draws tried before falling back to a UUID-based code"
    )

    default_validity_minutes: int = Field(
        default=30,
        gt=0,
        description="Validity applied when a request does not give one"
    )

    report_timezone: Optional[str] = Field(
        default=None,
        description="IANA zone for hourly/daily click breakdowns (process-local zone if not set)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    # Remote log collector (optional)
    telemetry_url: Optional[str] = Field(
        default=None,
        description="Endpoint receiving forwarded log records"
    )

    access_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the log collector"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("report_timezone")
    @classmethod
    def validate_report_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject zone names the tz database does not know."""
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError):
                raise ValueError(f"Unknown time zone: {v}")
        return v or None

    def report_tz(self) -> Optional[tzinfo]:
        """Zone object for analytics bucketing, None for the process-local zone."""
        return ZoneInfo(self.report_timezone) if self.report_timezone else None


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
