"""Middleware that buffers POST bodies for the edge pipeline."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from edge_origin.shared.logging import get_logger
from edge_origin.shared.models import RequestBody

logger = get_logger(__name__)


class BodyBufferingMiddleware(BaseHTTPMiddleware):
    """Buffers the raw body of POST requests, whatever their content type."""

    async def dispatch(self, request: Request, call_next):
        """Attach the buffered body to request state as RequestBody(data=...)."""
        if request.method == "POST":
            raw = await request.body()
            request.state.edge_body = RequestBody(data=raw or "")
            logger.debug(f"Buffered {len(raw)} byte POST body for {request.url.path}")
        else:
            request.state.edge_body = None

        response = await call_next(request)
        return response
