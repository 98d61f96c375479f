import base64

from starlette.requests import Request
from starlette.responses import Response

from edge_origin.origin.resolver import Origin
from edge_origin.shared.logging import get_logger
from edge_origin.shared.models import EdgeHeaders, HeaderEntry, RequestDescriptor, ResponseDescriptor

logger = get_logger(__name__)

HOP_BY_HOP_HEADERS = frozenset({"content-length", "transfer-encoding", "connection", "keep-alive"})


class EdgeRequestHandler:
    """
    Bridges Starlette requests to the origin resolver: builds the edge request
    descriptor and renders the edge response descriptor back over HTTP.
    """

    def _get_origin(self, request: Request) -> Origin:
        """Get the configured origin from the application state."""
        origin = getattr(request.app.state, "origin", None)
        if origin is None:
            raise RuntimeError("Origin is not initialized")
        return origin

    async def handle(self, request: Request) -> Response:
        """Public entry point used by Starlette router."""
        origin = self._get_origin(request)
        descriptor = self._build_request_descriptor(request)

        logger.info(f"{descriptor.method} {descriptor.uri} -> {origin.type.value} origin")

        edge_response = await origin.retrieve(descriptor)
        return self._build_http_response(edge_response)

    def _build_request_descriptor(self, request: Request) -> RequestDescriptor:
        """Convert incoming Starlette request → RequestDescriptor."""
        headers: EdgeHeaders = {}
        for name, value in request.headers.items():
            headers.setdefault(name.lower(), []).append(HeaderEntry(key=name, value=value))

        uri = request.url.path
        if request.url.query:
            uri = f"{uri}?{request.url.query}"

        return RequestDescriptor(
            method=request.method,
            uri=uri,
            headers=headers,
            body=getattr(request.state, "edge_body", None),
        )

    def _build_http_response(self, edge_response: ResponseDescriptor) -> Response:
        """
        Translate ResponseDescriptor → Starlette Response.
        """
        if edge_response.body_encoding == "base64":
            content = base64.b64decode(edge_response.body)
        else:
            content = edge_response.body.encode("utf-8")

        # Starlette sets content-length from the decoded body
        response = Response(content=content, status_code=int(edge_response.status))

        for name, entries in edge_response.headers.items():
            if name.lower() in HOP_BY_HOP_HEADERS:
                continue
            for entry in entries:
                response.headers.append(entry.key or name, entry.value)

        return response
