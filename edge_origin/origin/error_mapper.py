"""Turn any resolution failure into an edge error response."""

from http import HTTPStatus

from edge_origin.origin.headers import json_content_type
from edge_origin.shared.models import ErrorBody, ResponseDescriptor


def to_error_response(error: BaseException) -> ResponseDescriptor:
    """
    Build a JSON error response from an exception.

    Errors carrying `status_code`/`reason_phrase` keep them; anything else
    (transport failures, filesystem errors) becomes a 500.
    """
    status_code = getattr(error, "status_code", None)
    if not isinstance(status_code, int):
        status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value

    reason_phrase = getattr(error, "reason_phrase", None)
    if not isinstance(reason_phrase, str) or not reason_phrase:
        reason_phrase = _default_phrase(status_code)

    body = ErrorBody(code=status_code, message=str(error) or type(error).__name__)

    return ResponseDescriptor(
        status=str(status_code),
        status_description=reason_phrase,
        headers=json_content_type(),
        body_encoding="text",
        body=body.model_dump_json(),
    )


def _default_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return HTTPStatus.INTERNAL_SERVER_ERROR.phrase
