"""Origin resolver: dispatches edge requests to the configured upstream."""

import os
from enum import Enum
from typing import Any

from edge_origin.origin.error_mapper import to_error_response
from edge_origin.origin.errors import HttpError, InternalServerError, NotFoundError
from edge_origin.origin.fetchers import FileFetcher, HttpFetcher
from edge_origin.origin.headers import encode_body, json_content_type, select_body_encoding, to_multi_value
from edge_origin.shared.logging import get_logger
from edge_origin.shared.models import (
    FileResult,
    HttpResult,
    RequestDescriptor,
    ResponseDescriptor,
    UpstreamResult,
    request_from_edge_event,
)

logger = get_logger(__name__)


class OriginType(str, Enum):
    """Kinds of upstream an origin can point at."""

    HTTP = "http"
    HTTPS = "https"
    FILE = "file"
    NOOP = "noop"


def classify(base_url: str) -> OriginType:
    """Classify an origin configuration string by its prefix."""
    if not base_url:
        return OriginType.NOOP
    if base_url.startswith("http://"):
        return OriginType.HTTP
    if base_url.startswith("https://"):
        return OriginType.HTTPS
    return OriginType.FILE


class Origin:
    """
    The single configured upstream of the process.

    Built once from the configuration string and never mutated afterwards, so
    one instance can serve any number of concurrent resolutions.
    """

    def __init__(self, base_url: str = ""):
        self._type = classify(base_url)
        self._base_url = os.path.abspath(base_url) if self._type is OriginType.FILE else base_url

    def __repr__(self) -> str:
        return f"Origin(base_url={self._base_url!r}, type={self._type.value!r})"

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def type(self) -> OriginType:
        return self._type

    async def retrieve(self, request: RequestDescriptor) -> ResponseDescriptor:
        """
        Resolve a request into an edge response. Never raises.

        Any failure, classified or not, is turned into a JSON error response.
        """
        try:
            upstream = await self.resolve(request)

            if isinstance(upstream, HttpResult):
                logger.debug(
                    f"Upstream response: status={upstream.status} "
                    f"headers={upstream.headers} body_length={len(upstream.body)}"
                )
                return http_result_to_response(upstream)

            return file_result_to_response(upstream)

        except HttpError as exc:
            logger.warning(f"{request.method} {request.uri} -> {exc.status_code}: {exc}")
            return to_error_response(exc)

        except Exception as exc:
            logger.exception(f"Failed to resolve {request.method} {request.uri} against {self!r}: {exc}")
            return to_error_response(exc)

    async def retrieve_event(self, event: dict[str, Any]) -> ResponseDescriptor:
        """Like `retrieve`, but starting from a raw edge event payload."""
        try:
            request = request_from_edge_event(event)
        except Exception as exc:
            logger.exception(f"Malformed edge event: {exc}")
            return to_error_response(exc)

        return await self.retrieve(request)

    async def resolve(self, request: RequestDescriptor) -> UpstreamResult:
        """
        Fetch the upstream resource for a request from the matching fetcher.

        Raises:
            NotFoundError: For the no-op origin or a missing file
            InternalServerError: If the origin type is not one we know
            Exception: Filesystem or transport errors from the fetchers
        """
        if self._type is OriginType.FILE:
            return await FileFetcher(self._base_url).fetch(request)

        if self._type in (OriginType.HTTP, OriginType.HTTPS):
            return await HttpFetcher(self._base_url, self._type.value).fetch(request)

        if self._type is OriginType.NOOP:
            raise NotFoundError('Operation given as "noop"')

        raise InternalServerError('Invalid request type (needs to be "http", "https" or "file")')


def file_result_to_response(result: FileResult) -> ResponseDescriptor:
    """File contents are always labelled as JSON, whatever the file is."""
    return ResponseDescriptor(
        status="200",
        status_description="OK",
        headers=json_content_type(),
        body_encoding="text",
        body=result.contents,
    )


def http_result_to_response(result: HttpResult) -> ResponseDescriptor:
    encoding = select_body_encoding(result.headers)
    return ResponseDescriptor(
        status=str(result.status or 200),
        headers=to_multi_value(result.headers),
        body_encoding=encoding,
        body=encode_body(result.body, encoding),
    )
