"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    StatsResponse,
    SummaryResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlinks.common.headers import build_base_url

router = APIRouter()

logger = logging.getLogger("url_shortener.route")

SERVICE_NAME = "URL Shortener"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or short code taken"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a validity in minutes and a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    result = await service.shorten(
        url=body.url,
        validity=body.validity,
        custom_code=body.shortcode,
        base_url=base_url,
    )

    return ShortenResponse(**result)


@router.get(
    "/shorturls/stats/summary",
    response_model=SummaryResponse,
    summary="Service summary",
    description="Get service-wide statistics.",
)
async def get_summary(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    statistics = await service.summary()

    return SummaryResponse(
        service=SERVICE_NAME,
        uptime=service.uptime_seconds(),
        statistics=statistics,
        timestamp=_now(),
    )


@router.get(
    "/shorturls/{shortcode}/stats",
    response_model=StatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get click statistics",
    description="Get click analytics for a shortened URL.",
)
async def get_stats(request: Request, shortcode: str):
    """Get click statistics for a shortened URL."""
    service = request.app.state.service

    report = await service.stats(shortcode)

    return StatsResponse(**report, timestamp=_now())


@router.get(
    "/shorturls/{shortcode}",
    response_class=RedirectResponse,
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short code expired or inactive"},
    },
    summary="Follow short URL",
)
async def redirect_to_url(request: Request, shortcode: str):
    """Redirect to the original URL and record the click."""
    service = request.app.state.service

    original_url = await service.redirect_target(
        shortcode,
        ip=request.state.client_ip,
        user_agent=request.headers.get("user-agent", ""),
    )

    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        503: {"model": HealthResponse, "description": "Storage unavailable"},
    },
    summary="Health check",
    description="Check if the service and its storage are alive.",
)
async def health_check(request: Request):
    """Liveness endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()
    logger.info("Health check requested", extra={"healthy": health["overall"]})

    if not health["overall"]:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=HealthResponse(status="Unavailable", timestamp=_now()).model_dump(mode="json"),
        )

    return HealthResponse(status="OK", timestamp=_now())
