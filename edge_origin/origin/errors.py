"""HTTP error types raised while resolving an origin."""

from http import HTTPStatus


class HttpError(Exception):
    """Error that already knows which HTTP status it maps to."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None):
        super().__init__(message or self.status.phrase)
        self.status_code: int = self.status.value
        self.reason_phrase: str = self.status.phrase


class NotFoundError(HttpError):
    """Requested resource does not exist at the origin."""

    status = HTTPStatus.NOT_FOUND


class InternalServerError(HttpError):
    """Origin is misconfigured; nothing the client can fix."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
