"""Business logic service for URL shortener."""

import asyncio
import logging
import time
from typing import Optional, Dict, Any
from datetime import tzinfo

from .analytics import build_report, build_summary
from .common.clock import Clock, utc_now
from .common.url_builder import build_short_url
from .errors import GoneError, NotFoundError
from .storage.base import ClickRecorderBase, LinkStoreBase
from .storage.memory import InMemoryClickRecorder, InMemoryLinkStore
from .shortcode import ShortCodeGenerator

DEFAULT_VALIDITY_MINUTES = 30


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        link_store: Optional[LinkStoreBase] = None,
        click_recorder: Optional[ClickRecorderBase] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Clock = utc_now,
        logger: Optional[logging.Logger] = None,
        report_timezone: Optional[tzinfo] = None,
        default_validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
    ):
        """Initialize URL shortener service.

        Args:
            link_store: Link store instance (in-memory store if omitted)
            click_recorder: Click recorder instance (in-memory recorder if omitted)
            short_code_generator: Generator for the default link store
            clock: Time source for expiry checks and analytics
            logger: Optional logger
            report_timezone: Zone for hourly/daily breakdowns (process-local if None)
            default_validity_minutes: Validity applied when none is given
        """
        self.clock = clock
        self.logger = logger or logging.getLogger("url_shortener.service")
        # Empty stores are falsy (they define __len__), so compare against None
        if link_store is None:
            link_store = InMemoryLinkStore(
                short_code_generator=short_code_generator,
                clock=clock,
            )
        if click_recorder is None:
            click_recorder = InMemoryClickRecorder(clock=clock)
        self.link_store = link_store
        self.click_recorder = click_recorder
        self.report_timezone = report_timezone
        self.default_validity_minutes = default_validity_minutes
        self.started_at = time.monotonic()
        # Held across the two-store write steps
        self._lock = asyncio.Lock()

    async def shorten(
        self,
        url: str,
        validity: Optional[int] = None,
        custom_code: Optional[str] = None,
        base_url: str = "",
    ) -> Dict[str, Any]:
        """Create a new short URL.

        The link record and its empty statistics are created together; if the
        statistics cannot be initialized the link is discarded again.

        Args:
            url: The original long URL
            validity: Minutes until the link expires
            custom_code: Optional custom short code
            base_url: Scheme and host the short link is served from

        Returns:
            Dictionary with shortLink and expiry

        Raises:
            ValidationError: If the URL or validity is invalid
            ConflictError: If the custom code already exists
        """
        if validity is None:
            validity = self.default_validity_minutes

        async with self._lock:
            link = await self.link_store.create(url, validity, custom_code, now=self.clock())
            try:
                await self.click_recorder.initialize(
                    link.shortcode, link.original_url, link.created_at
                )
            except Exception:
                await self.link_store.discard(link.shortcode)
                self.logger.error(
                    f"Rolled back {link.shortcode} after stats initialization failed",
                    extra={"shortcode": link.shortcode},
                )
                raise

        self.logger.info("URL shortened", extra={"shortcode": link.shortcode, "url": url})

        return {
            "shortLink": build_short_url(link.shortcode, base_url),
            "expiry": link.expires_at,
        }

    async def redirect_target(self, shortcode: str, ip: str, user_agent: str) -> str:
        """Resolve a short code and record the click.

        Args:
            shortcode: The short code to follow
            ip: Client address
            user_agent: Client user agent

        Returns:
            The original URL to redirect to

        Raises:
            NotFoundError: If the short code is unknown
            GoneError: If the link is expired or deactivated
        """
        self.logger.info("URL access requested", extra={"shortcode": shortcode})

        async with self._lock:
            now = self.clock()
            try:
                link = await self.link_store.resolve(shortcode, now=now)
            except NotFoundError:
                self.logger.warning("Shortcode not found", extra={"shortcode": shortcode})
                raise
            except GoneError:
                self.logger.warning("URL expired or inactive", extra={"shortcode": shortcode})
                raise
            await self.click_recorder.record(shortcode, ip, user_agent, now=now)

        self.logger.info(
            "URL accessed", extra={"shortcode": shortcode, "url": link.original_url}
        )
        return link.original_url

    async def stats(self, shortcode: str) -> Dict[str, Any]:
        """Statistics report for one short code.

        Raises:
            NotFoundError: If no statistics exist for the short code
        """
        self.logger.info("Stats requested", extra={"shortcode": shortcode})

        stats = await self.click_recorder.get(shortcode)
        if stats is None:
            self.logger.warning("Stats not found", extra={"shortcode": shortcode})
            raise NotFoundError("Statistics not found")

        link = await self.link_store.get(shortcode)
        report = build_report(stats, link, self.clock(), self.report_timezone)

        self.logger.info(
            "Stats retrieved",
            extra={"shortcode": shortcode, "totalClicks": stats.total_clicks},
        )
        return report

    async def summary(self) -> Dict[str, Any]:
        """Service-wide totals across every short code."""
        self.logger.info("Service summary requested")

        links = await self.link_store.all()
        stats = await self.click_recorder.all()
        summary = build_summary(links, stats, self.clock())

        self.logger.info("Service summary retrieved")
        return summary

    async def deactivate(self, shortcode: str) -> None:
        """Stop a short code from redirecting while keeping its statistics.

        Raises:
            NotFoundError: If the short code is unknown
        """
        await self.link_store.deactivate(shortcode)
        self.logger.info("URL deactivated", extra={"shortcode": shortcode})

    def uptime_seconds(self) -> int:
        """Whole seconds since the service was created."""
        return int(time.monotonic() - self.started_at)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.link_store.all()
            await self.click_recorder.all()
            storage_healthy = True
        except Exception:
            self.logger.exception("Storage health check failed")
            storage_healthy = False

        return {
            "storage": storage_healthy,
            "overall": storage_healthy,
        }
