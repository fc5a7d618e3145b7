"""In-memory storage implementation for URL shortener."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from .base import ClickRecorderBase, LinkStoreBase
from .models import ClickEvent, LinkRecord, StatsRecord
from ..common.clock import Clock, utc_now
from ..common.validators import is_valid_url, is_valid_validity
from ..errors import ConflictError, GoneError, NotFoundError, ValidationError
from ..shortcode import ShortCodeGenerator


class InMemoryLinkStore(LinkStoreBase):
    """Process-local link store.

    All access to the mapping goes through one asyncio lock, so code
    allocation and insertion happen as a single step.
    """

    def __init__(
        self,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Clock = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link store.

        Args:
            short_code_generator: Generator used to allocate codes
            clock: Time source used when no explicit timestamp is given
            logger: Optional logger instance
        """
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock
        self.logger = logger or logging.getLogger("url_shortener.db")
        self._links: Dict[str, LinkRecord] = {}
        self._lock = asyncio.Lock()

    async def create(
        self,
        original_url: str,
        validity_minutes: int,
        custom_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LinkRecord:
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise ValidationError(error)

        is_valid, error = is_valid_validity(validity_minutes)
        if not is_valid:
            raise ValidationError(error)

        created_at = now or self.clock()

        async with self._lock:
            shortcode = self.generator.generate(custom_code, exists=self._links.__contains__)
            record = LinkRecord(
                shortcode=shortcode,
                original_url=original_url,
                created_at=created_at,
                expires_at=created_at + timedelta(minutes=validity_minutes),
            )
            self._links[shortcode] = record

        self.logger.debug(f"Stored link {shortcode}", extra={"shortcode": shortcode})
        return replace(record)

    async def resolve(self, shortcode: str, now: Optional[datetime] = None) -> LinkRecord:
        now = now or self.clock()

        async with self._lock:
            record = self._links.get(shortcode)
            if record is None:
                raise NotFoundError("Short URL not found")
            if not record.is_live(now):
                raise GoneError("Short URL has expired")
            return replace(record)

    async def get(self, shortcode: str) -> Optional[LinkRecord]:
        async with self._lock:
            record = self._links.get(shortcode)
            return replace(record) if record else None

    async def deactivate(self, shortcode: str) -> LinkRecord:
        async with self._lock:
            record = self._links.get(shortcode)
            if record is None:
                raise NotFoundError("Short URL not found")
            record.is_active = False
            return replace(record)

    async def discard(self, shortcode: str) -> bool:
        async with self._lock:
            return self._links.pop(shortcode, None) is not None

    async def all(self) -> List[LinkRecord]:
        async with self._lock:
            return [replace(record) for record in self._links.values()]

    def __len__(self) -> int:
        return len(self._links)


class InMemoryClickRecorder(ClickRecorderBase):
    """Process-local click analytics."""

    def __init__(self, clock: Clock = utc_now, logger: Optional[logging.Logger] = None):
        """Initialize click recorder.

        Args:
            clock: Time source used when no explicit timestamp is given
            logger: Optional logger instance
        """
        self.clock = clock
        self.logger = logger or logging.getLogger("url_shortener.db")
        self._stats: Dict[str, StatsRecord] = {}
        self._lock = asyncio.Lock()

    async def initialize(self, shortcode: str, original_url: str, created_at: datetime) -> None:
        async with self._lock:
            if shortcode in self._stats:
                raise ConflictError(f"Statistics for '{shortcode}' already exist")
            self._stats[shortcode] = StatsRecord(
                shortcode=shortcode,
                original_url=original_url,
                created_at=created_at,
            )

    async def record(
        self,
        shortcode: str,
        ip: str,
        user_agent: str,
        now: Optional[datetime] = None,
    ) -> ClickEvent:
        event = ClickEvent(timestamp=now or self.clock(), ip=ip, user_agent=user_agent)

        async with self._lock:
            stats = self._stats.get(shortcode)
            if stats is None:
                # Link store and click recorder out of sync
                raise NotFoundError("Statistics not found")
            stats.click_details.append(event)
            stats.total_clicks += 1
            stats.last_accessed = event.timestamp

        return event

    async def get(self, shortcode: str) -> Optional[StatsRecord]:
        async with self._lock:
            stats = self._stats.get(shortcode)
            return stats.snapshot() if stats else None

    async def discard(self, shortcode: str) -> bool:
        async with self._lock:
            return self._stats.pop(shortcode, None) is not None

    async def all(self) -> List[StatsRecord]:
        async with self._lock:
            return [stats.snapshot() for stats in self._stats.values()]

    def __len__(self) -> int:
        return len(self._stats)
