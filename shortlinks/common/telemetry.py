"""Remote log forwarding for URL shortener.

Records reach the remote collector from a background thread; a slow or
unreachable collector never delays the request that produced the record.
"""

import logging
import logging.handlers
import queue
from typing import Dict, Optional

import httpx

from .logging_config import level_name, package_for

STACK = "backend"

# Records waiting for the listener thread; newer records are dropped when full
MAX_QUEUED_RECORDS = 1000


def _auth_headers(access_token: str) -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {access_token}",
    }


def build_payload(level: str, package: str, message: str) -> Dict[str, str]:
    """Body accepted by the log collector."""
    return {
        "stack": STACK,
        "level": level,
        "package": package,
        "message": message,
    }


class TelemetryHandler(logging.Handler):
    """POST each record to a remote log collector."""

    def __init__(
        self,
        url: str,
        access_token: str,
        timeout: float = 5.0,
        client: Optional[httpx.Client] = None,
    ):
        super().__init__()
        self.url = url
        self.access_token = access_token
        self.client = client or httpx.Client(timeout=timeout)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = build_payload(
                level_name(record.levelno),
                package_for(record.name),
                record.getMessage(),
            )
            self.client.post(self.url, json=payload, headers=_auth_headers(self.access_token))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.client.close()
        finally:
            super().close()


class DroppingQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that discards records once the queue is full."""

    def __init__(self, records):
        super().__init__(records)
        self.dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            self.dropped += 1



class BoundedQueueListener(logging.handlers.QueueListener):
    """Listener whose stop sentinel waits for room in a bounded queue."""

    def enqueue_sentinel(self) -> None:
        self.queue.put(self._sentinel)

def attach_telemetry(
    logger: logging.Logger,
    url: str,
    access_token: str,
    level: int = logging.INFO,
    client: Optional[httpx.Client] = None,
    max_queued: int = MAX_QUEUED_RECORDS,
) -> logging.handlers.QueueListener:
    """Forward ``logger`` records to ``url`` through a queue drained by a listener thread.

    Returns:
        The started listener; stop it with ``detach_telemetry``.
    """
    handler = TelemetryHandler(url, access_token, client=client)
    handler.setLevel(level)

    records: "queue.Queue[logging.LogRecord]" = queue.Queue(max_queued)
    queue_handler = DroppingQueueHandler(records)
    queue_handler.setLevel(level)

    listener = BoundedQueueListener(records, handler, respect_handler_level=True)
    queue_handler.listener = listener
    logger.addHandler(queue_handler)
    listener.start()
    return listener


def detach_telemetry(logger: logging.Logger) -> None:
    """Flush and stop every telemetry listener attached to ``logger``."""
    for handler in list(logger.handlers):
        listener = getattr(handler, "listener", None)
        if isinstance(handler, logging.handlers.QueueHandler) and listener is not None:
            logger.removeHandler(handler)
            listener.stop()
            for target in listener.handlers:
                target.close()


async def check_connection(
    url: Optional[str],
    access_token: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """Send a test record to the collector.

    Returns:
        True if the collector accepted it, False otherwise or when unconfigured
    """
    if not url or not access_token:
        return False

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=5.0)
    try:
        response = await client.post(
            url,
            json=build_payload("info", "middleware", "Test connection"),
            headers=_auth_headers(access_token),
        )
        return response.is_success
    except httpx.HTTPError:
        return False
    finally:
        if owns_client:
            await client.aclose()
