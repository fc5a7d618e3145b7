"""Abstract base classes for URL shortener storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import ClickEvent, LinkRecord, StatsRecord


class LinkStoreBase(ABC):
    """Abstract base class for short code -> link record storage."""

    @abstractmethod
    async def create(
        self,
        original_url: str,
        validity_minutes: int,
        custom_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LinkRecord:
        """Create a new link record.

        Args:
            original_url: The original long URL
            validity_minutes: Minutes until the link expires
            custom_code: Optional user supplied short code
            now: Creation timestamp (defaults to the store clock)

        Returns:
            The created link record

        Raises:
            ValidationError: If the URL or validity is invalid
            ConflictError: If the custom code already exists
        """
        pass

    @abstractmethod
    async def resolve(self, shortcode: str, now: Optional[datetime] = None) -> LinkRecord:
        """Look up a live link.

        Args:
            shortcode: The short code to lookup
            now: Reference time for the expiry check

        Returns:
            The link record

        Raises:
            NotFoundError: If the short code is unknown
            GoneError: If the link is expired or deactivated
        """
        pass

    @abstractmethod
    async def get(self, shortcode: str) -> Optional[LinkRecord]:
        """Get a link record regardless of liveness, or None if unknown."""
        pass

    @abstractmethod
    async def deactivate(self, shortcode: str) -> LinkRecord:
        """Mark a link inactive.

        Raises:
            NotFoundError: If the short code is unknown
        """
        pass

    @abstractmethod
    async def discard(self, shortcode: str) -> bool:
        """Remove a link record. Only used to roll back a failed creation.

        Returns:
            True if removed, False if not found
        """
        pass

    @abstractmethod
    async def all(self) -> List[LinkRecord]:
        """Snapshot of every link record."""
        pass


class ClickRecorderBase(ABC):
    """Abstract base class for per short code click analytics."""

    @abstractmethod
    async def initialize(self, shortcode: str, original_url: str, created_at: datetime) -> None:
        """Create an empty stats record.

        Raises:
            ConflictError: If a record already exists for the short code
        """
        pass

    @abstractmethod
    async def record(
        self,
        shortcode: str,
        ip: str,
        user_agent: str,
        now: Optional[datetime] = None,
    ) -> ClickEvent:
        """Append a click event.

        Args:
            shortcode: The short code that was followed
            ip: Client address
            user_agent: Client user agent
            now: Click timestamp (defaults to the store clock)

        Returns:
            The recorded event

        Raises:
            NotFoundError: If no stats record exists for the short code
        """
        pass

    @abstractmethod
    async def get(self, shortcode: str) -> Optional[StatsRecord]:
        """Read-only snapshot of a stats record, or None if unknown."""
        pass

    @abstractmethod
    async def discard(self, shortcode: str) -> bool:
        """Remove a stats record.

        Returns:
            True if removed, False if not found
        """
        pass

    @abstractmethod
    async def all(self) -> List[StatsRecord]:
        """Snapshot of every stats record."""
        pass
