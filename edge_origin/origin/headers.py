"""Header shape translation and body encoding for edge responses."""

import base64
from typing import Literal

from edge_origin.shared.models import EdgeHeaders, HeaderEntry, StandardHeaders

BodyEncoding = Literal["text", "base64"]

# content-encoding values whose bodies are not valid text
BINARY_CONTENT_ENCODINGS = frozenset({"gzip"})


def to_multi_value(headers: StandardHeaders, into: EdgeHeaders | None = None) -> EdgeHeaders:
    """
    Convert standard headers to the edge multi-value shape.

    Values are appended to any entries already present under the same name,
    so repeated calls merge instead of overwriting.

    Args:
        headers: Header name -> value or list of values
        into: Existing edge headers to merge into (modified in place)

    Returns:
        Edge headers, every name mapping to a non-empty list
    """
    aggregate: EdgeHeaders = {} if into is None else into

    for name, value in headers.items():
        values = value if isinstance(value, list) else [value]
        entries = [HeaderEntry(value=item) for item in values if isinstance(item, str)]
        if entries:
            aggregate.setdefault(name, []).extend(entries)

    return aggregate


def to_single_value(headers: EdgeHeaders) -> dict[str, str]:
    """Convert edge headers to one value per name, keeping only the first value."""
    single: dict[str, str] = {}

    for name, entries in headers.items():
        if not entries:
            continue
        first = entries[0]
        single[first.key or name] = first.value

    return single


def first_header_value(headers: StandardHeaders, name: str) -> str:
    """First value of a header, or "" when it is absent."""
    value = headers.get(name)
    if isinstance(value, list):
        return value[0] if value else ""
    return value or ""


def select_body_encoding(headers: StandardHeaders) -> BodyEncoding:
    """Pick base64 for compressed bodies, text for everything else."""
    if first_header_value(headers, "content-encoding") in BINARY_CONTENT_ENCODINGS:
        return "base64"
    return "text"


def encode_body(body: bytes, encoding: BodyEncoding) -> str:
    """Render raw body bytes as a string in the given edge body encoding."""
    if encoding == "base64":
        return base64.b64encode(body).decode("ascii")
    return body.decode("utf-8", errors="replace")


def json_content_type() -> EdgeHeaders:
    """Edge headers declaring a JSON body."""
    return {"content-type": [HeaderEntry(key="content-type", value="application/json")]}
