"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional, Union
from datetime import datetime


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: Optional[str] = Field(None, description="The URL to shorten")
    validity: Optional[StrictInt] = Field(None, description="Minutes the short link stays valid")
    shortcode: Optional[str] = Field(None, description="Optional custom short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "validity": 30
                },
                {
                    "url": "https://github.com/user/repo",
                    "validity": 120,
                    "shortcode": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_link: str = Field(..., description="The complete short URL")
    expiry: datetime = Field(..., description="Expiry timestamp")


class ClickActivity(CamelModel):
    """One recent click."""

    timestamp: datetime
    ip: str
    user_agent: str


class ClickAnalytics(CamelModel):
    """Derived click statistics."""

    age_in_days: int
    avg_clicks_per_day: Union[int, float]
    recent_clicks24h: int = Field(..., alias="recentClicks24h")
    hourly_breakdown: Dict[int, int]
    daily_breakdown: Dict[str, int]


class StatsResponse(CamelModel):
    """Statistics for one short code."""

    shortcode: str
    original_url: str
    created_at: datetime
    total_clicks: int
    last_accessed: Optional[datetime] = None
    is_active: bool
    expires_at: Optional[datetime] = None
    analytics: ClickAnalytics
    recent_activity: List[ClickActivity]
    timestamp: datetime


class SummaryStatistics(CamelModel):
    """Service-wide totals."""

    total_urls: int
    active_urls: int
    expired_urls: int
    total_clicks: int
    avg_clicks_per_url: Union[int, float]


class SummaryResponse(CamelModel):
    """Service summary."""

    service: str
    uptime: int
    statistics: SummaryStatistics
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="HTTP status phrase")
    message: str = Field(..., description="Detailed error information")
    timestamp: datetime = Field(..., description="Error timestamp")
