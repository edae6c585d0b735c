"""Error hierarchy for the Mailosaur client."""

from __future__ import annotations


class MailosaurError(Exception):
    """Base exception for all Mailosaur client errors.

    Attributes:
        message: The error message.
        error_type: Machine-readable error kind (e.g. 'item_not_found').
        http_status_code: HTTP status code, when the error came from the API.
        http_response_body: Raw response body, when the error came from the API.
    """

    def __init__(
        self,
        message: str,
        error_type: str,
        http_status_code: int | None = None,
        http_response_body: str | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.http_status_code = http_status_code
        self.http_response_body = http_response_body
        super().__init__(message)


class InvalidRequestError(MailosaurError):
    """Malformed input caught before any request was sent."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "invalid_request")


class HttpError(MailosaurError):
    """Non-success status returned by the Mailosaur API."""

    pass


class SearchTimeoutError(MailosaurError):
    """No matching message was found within the search timeout."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "search_timeout")


class NetworkError(MailosaurError):
    """Network communication failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "network_error")
