"""Data models shared by the origin resolver and the edge service."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HeaderEntry(BaseModel):
    """One value of an edge header; `key` keeps the original header casing."""

    key: Annotated[str | None, Field(description="Header name as sent by the client")] = None
    value: Annotated[str, Field(description="Header value")]


# Edge shape: lowercase header name -> ordered, non-empty list of entries
EdgeHeaders = dict[str, list[HeaderEntry]]

# Conventional shape: header name -> one value or several
StandardHeaders = dict[str, Union[str, list[str]]]


class RequestBody(BaseModel):
    """Buffered request body as produced by the body-buffering middleware."""

    data: Annotated[str | bytes, Field(description="Raw request body")] = ""


class RequestDescriptor(BaseModel):
    """Incoming edge request. Immutable for the duration of one resolution."""

    model_config = ConfigDict(frozen=True)

    method: Annotated[str, Field(description="HTTP method")] = "GET"
    uri: Annotated[str, Field(description="Path plus optional query string, no host")] = "/"
    headers: Annotated[EdgeHeaders, Field(description="Multi-value edge headers")] = {}
    body: Annotated[RequestBody | None, Field(description="Buffered body, if any")] = None


class FileResult(BaseModel):
    """Upstream result of a file origin."""

    kind: Literal["file"] = "file"
    contents: Annotated[str, Field(description="Whole file content as UTF-8 text")]


class HttpResult(BaseModel):
    """Upstream result of an HTTP(S) origin."""

    kind: Literal["http"] = "http"
    status: Annotated[int, Field(ge=100, le=999, description="Upstream status code")] = 200
    headers: Annotated[StandardHeaders, Field(description="Raw upstream response headers")] = {}
    body: Annotated[bytes, Field(description="Fully buffered upstream body")] = b""


UpstreamResult = Annotated[Union[FileResult, HttpResult], Field(discriminator="kind")]


class ResponseDescriptor(BaseModel):
    """Normalized response handed back to the edge, for success and error alike."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Annotated[str, Field(description="String-encoded HTTP status")]
    status_description: Annotated[str | None, Field(description="Reason phrase")] = None
    headers: Annotated[EdgeHeaders, Field(description="Multi-value edge headers")] = {}
    body_encoding: Annotated[Literal["text", "base64"], Field(description="How `body` is encoded")] = "text"
    body: Annotated[str, Field(description="Body, already encoded per body_encoding")] = ""

    def to_edge(self) -> dict[str, Any]:
        """Dump in the edge wire shape (camelCase keys, unset optionals dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorBody(BaseModel):
    """JSON body of every error response."""

    code: Annotated[int, Field(description="HTTP status code")]
    message: Annotated[str, Field(description="Human-readable error text")]


def request_from_edge_event(event: dict[str, Any]) -> RequestDescriptor:
    """
    Pull the request out of a raw edge event.

    Args:
        event: Payload shaped {"Records": [{"cf": {"request": {...}}}]}

    Returns:
        Validated request descriptor

    Raises:
        KeyError, IndexError: If the event is not shaped like an edge event
        pydantic.ValidationError: If the embedded request is malformed
    """
    request = dict(event["Records"][0]["cf"]["request"])

    # Edge events carry the query string separately from the uri
    querystring = request.pop("querystring", "")
    if querystring and "?" not in request.get("uri", ""):
        request["uri"] = f"{request.get('uri', '/')}?{querystring}"

    return RequestDescriptor.model_validate(request)
