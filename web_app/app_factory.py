"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .errors import register_error_handlers
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="URL shortening service with click analytics",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware; the last added runs first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ForwardedHeadersMiddleware)

    register_error_handlers(app)

    app.include_router(api_router, tags=["API"])

    return app
