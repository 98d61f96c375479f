"""Edge origin service entry point."""

from contextlib import asynccontextmanager

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

from edge_origin.origin.resolver import Origin
from edge_origin.service.handlers import EdgeRequestHandler
from edge_origin.service.middleware import BodyBufferingMiddleware
from edge_origin.shared.config import Settings, get_settings
from edge_origin.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)

ROUTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


def create_app(settings: Settings | None = None) -> Starlette:
    """Create and configure the edge origin application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.log_level)

        app.state.origin = Origin(settings.origin)
        logger.info(f"Starting edge origin service with {app.state.origin!r}")

        yield

        logger.info("Edge origin service stopped")

    handler = EdgeRequestHandler()
    app = Starlette(
        debug=False,
        routes=[
            Route("/{path:path}", handler.handle, methods=ROUTED_METHODS),
        ],
        lifespan=lifespan,
    )

    app.add_middleware(BodyBufferingMiddleware)

    return app


def main() -> None:
    """Entry point for the edge origin service."""
    settings = get_settings()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        loop="uvloop",
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
