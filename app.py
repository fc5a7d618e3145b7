#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI on a single event loop). Links and click statistics live in process
memory, so the service runs as a single uvicorn worker.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links when a request carries no host
    PORT - Port to listen on
    DEFAULT_VALIDITY_MINUTES - Validity used when a request gives none
    REPORT_TIMEZONE - IANA zone for hourly/daily click breakdowns
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - Set to 'true' for structured JSON logs
    TELEMETRY_URL - Optional remote log collector
    ACCESS_TOKEN - Bearer token for the remote log collector
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.service import URLShortenerService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.storage.memory import InMemoryClickRecorder, InMemoryLinkStore
from shortlinks.common.logging_config import setup_logging
from shortlinks.common.telemetry import check_connection, detach_telemetry
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    if config.telemetry_url:
        connected = await check_connection(config.telemetry_url, config.access_token)
        logger.info(f"Test server connection: {'Success' if connected else 'Failed'}")

    logger.info("Service started successfully")

    # Yield control to the application
    yield

    # Shutdown
    logger.info("Shutting down URL shortener service...")
    logger.info("Service stopped")
    detach_telemetry(logger)


def build_service(config, logger) -> URLShortenerService:
    """Wire stores and generator into the service."""
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        max_attempts=config.max_collision_retries,
    )
    return URLShortenerService(
        link_store=InMemoryLinkStore(
            short_code_generator=generator,
            logger=logger.getChild("db"),
        ),
        click_recorder=InMemoryClickRecorder(logger=logger.getChild("db")),
        logger=logger.getChild("service"),
        report_timezone=config.report_tz(),
        default_validity_minutes=config.default_validity_minutes,
    )


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
        telemetry_url=config.telemetry_url,
        access_token=config.access_token,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'access_token'})}")

    app = create_app(
        service_instance=build_service(config, logger),
        config=config,
    )

    # Store logger in app state
    app.state.logger = logger

    # Override lifespan
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
