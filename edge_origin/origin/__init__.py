"""Origin resolution and response translation."""

from edge_origin.origin.errors import HttpError, InternalServerError, NotFoundError
from edge_origin.origin.resolver import Origin, OriginType, classify

__all__ = [
    "HttpError",
    "InternalServerError",
    "NotFoundError",
    "Origin",
    "OriginType",
    "classify",
]
