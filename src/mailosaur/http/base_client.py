"""Base HTTP client for the Mailosaur client."""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn
from urllib.parse import quote

import httpx

from ..constants import USER_AGENT
from ..errors import HttpError, NetworkError
from ..types import ClientConfig

logger = logging.getLogger("mailosaur")

# (error_type, message) by HTTP status code
_STATUS_ERRORS: dict[int, tuple[str, str]] = {
    400: ("invalid_request", "Request had one or more invalid parameters."),
    401: ("authentication_error", "Authentication failed, check your API key."),
    403: ("permission_error", "Insufficient permission to perform that task."),
    404: ("item_not_found", "Not found, check input parameters."),
}
_DEFAULT_STATUS_ERROR = (
    "api_error",
    "An API error occurred, see httpStatusCode for more information.",
)


def encode_path_segment(value: str) -> str:
    """URL-encode a path segment for use in API URLs.

    Args:
        value: The value to encode.

    Returns:
        URL-encoded string safe for use in URL paths.
    """
    return quote(value, safe="")


def _describe_invalid_request(response: httpx.Response) -> str | None:
    """Build a detail string from a 400 response body, if it has one."""
    try:
        data = response.json()
    except (ValueError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None

    details = []
    for error in data.get("errors") or []:
        field = error.get("field")
        for detail in error.get("detail") or []:
            description = detail.get("description")
            if description:
                details.append(f"({field}) {description}" if field else description)
    return " ".join(details) or None


class BaseApiClient:
    """Base HTTP client for the Mailosaur API.

    Provides common HTTP operations used by all resource-specific clients.
    Requests are never retried.

    Attributes:
        config: Client configuration.
    """

    def __init__(self, config: ClientConfig) -> None:
        """Initialize the base API client.

        Args:
            config: Client configuration with API key and settings.
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Returns:
            The HTTP client instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                auth=httpx.BasicAuth(self.config.api_key, ""),
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self.config.timeout / 1000),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        expected_status: int = 200,
    ) -> httpx.Response:
        """Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: API path.
            json: JSON body for the request.
            params: Query parameters.
            expected_status: The only status code treated as success.

        Returns:
            The HTTP response.

        Raises:
            HttpError: If the response status is not the expected one.
            NetworkError: If there's a network communication failure.
        """
        client = await self._get_client()
        try:
            response = await client.request(method, path, json=json, params=params)
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as e:
            raise NetworkError(f"Network error: {e}") from e

        if response.status_code != expected_status:
            self._handle_error_response(response)

        return response

    def _handle_error_response(self, response: httpx.Response) -> NoReturn:
        """Map an unexpected HTTP response to an HttpError.

        Args:
            response: The HTTP response.

        Raises:
            HttpError: Always.
        """
        error_type, message = _STATUS_ERRORS.get(response.status_code, _DEFAULT_STATUS_ERROR)
        if response.status_code == 400:
            detail = _describe_invalid_request(response)
            if detail:
                message = f"{message} {detail}"

        logger.debug("Request failed with HTTP %s (%s)", response.status_code, error_type)
        raise HttpError(
            message,
            error_type,
            http_status_code=response.status_code,
            http_response_body=response.text,
        )
