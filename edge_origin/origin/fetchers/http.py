"""HTTP fetcher: forwards an edge request to a remote HTTP(S) origin."""

from typing import Literal
from urllib.parse import urlsplit

import aiohttp
from multidict import CIMultiDictProxy
from yarl import URL

from edge_origin.origin.fetchers.base_fetcher import UpstreamFetcher
from edge_origin.origin.headers import to_single_value
from edge_origin.shared.logging import get_logger
from edge_origin.shared.models import HttpResult, RequestDescriptor, StandardHeaders

logger = get_logger(__name__)

BODY_FRAMING_HEADERS = frozenset({"content-length", "transfer-encoding"})


class HttpFetcher(UpstreamFetcher):
    """Issues one outbound request per fetch and buffers the whole response."""

    def __init__(self, base_url: str, scheme: Literal["http", "https"]):
        """
        Initialize HTTP fetcher.

        Args:
            base_url: Origin URL; only scheme, host and port are used
            scheme: "http" or "https"
        """
        self._base_url = base_url
        self._scheme = scheme

    def build_url(self, uri: str) -> URL:
        """Outbound URL: origin host and port with the request's path and query."""
        origin = urlsplit(self._base_url)
        host = origin.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        if origin.port is not None:
            host = f"{host}:{origin.port}"

        # without an explicit port the scheme default applies: 80 or 443
        path = uri if uri.startswith("/") else f"/{uri}"
        return URL(f"{self._scheme}://{host}{path}", encoded=True)

    @staticmethod
    def build_headers(request: RequestDescriptor) -> dict[str, str]:
        """
        Outbound headers: first value of each request header, connection closed.

        Body framing headers are only forwarded along with a body.
        """
        dropped = {"connection"}
        if _body_bytes(request) is None:
            dropped |= BODY_FRAMING_HEADERS

        headers = {
            name: value
            for name, value in to_single_value(request.headers).items()
            if name.lower() not in dropped
        }
        headers["Connection"] = "Close"
        return headers

    async def fetch(self, request: RequestDescriptor) -> HttpResult:
        url = self.build_url(request.uri)
        headers = self.build_headers(request)
        data = _body_bytes(request)

        logger.debug(f"Forwarding {request.method} {url}")

        connector = aiohttp.TCPConnector(force_close=True)
        async with aiohttp.ClientSession(
            connector=connector,
            auto_decompress=False,
            skip_auto_headers=("Accept-Encoding", "User-Agent"),
        ) as session:
            async with session.request(
                method=request.method,
                url=url,
                headers=headers,
                data=data,
                allow_redirects=False,
            ) as response:
                body = await response.read()

                return HttpResult(
                    status=response.status or 200,
                    headers=_standard_headers(response.headers),
                    body=body,
                )


def _body_bytes(request: RequestDescriptor) -> bytes | None:
    if request.body is None or not request.body.data:
        return None
    data = request.body.data
    return data.encode("utf-8") if isinstance(data, str) else data


def _standard_headers(raw: CIMultiDictProxy[str]) -> StandardHeaders:
    """Lowercase names; a name seen more than once collects its values in a list."""
    headers: StandardHeaders = {}
    for name, value in raw.items():
        name = name.lower()
        existing = headers.get(name)
        if existing is None:
            headers[name] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            headers[name] = [existing, value]
    return headers
