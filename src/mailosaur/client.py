"""MailosaurClient - Main entry point for the Mailosaur client."""

from __future__ import annotations

from typing import Any

from .analysis import Analysis
from .constants import DEFAULT_BASE_URL, DEFAULT_SMTP_HOST, DEFAULT_TIMEOUT_MS
from .files import Files
from .http import ApiClient
from .messages import Messages
from .servers import Servers
from .types import ClientConfig


class MailosaurClient:
    """Main client for interacting with the Mailosaur API.

    Operations are grouped by resource: ``messages``, ``servers``,
    ``analysis`` and ``files``. All groups share one HTTP connection.

    Example:
        ```python
        async with MailosaurClient(api_key="your-api-key") as client:
            criteria = SearchCriteria(sent_to="anything@abcd1234.mailosaur.net")
            message = await client.messages.get("abcd1234", criteria)
            print(f"Received: {message.subject}")
        ```
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT_MS,
        smtp_host: str = DEFAULT_SMTP_HOST,
    ) -> None:
        """Initialize the Mailosaur client.

        Args:
            api_key: API key for authentication.
            base_url: Base URL for the API server.
            timeout: HTTP request timeout in milliseconds.
            smtp_host: Hostname used when generating server email addresses.
        """
        if not api_key:
            raise ValueError("api_key is required")

        self._config = ClientConfig(
            api_key=api_key,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=timeout,
            smtp_host=smtp_host or DEFAULT_SMTP_HOST,
        )
        self._api_client = ApiClient(self._config)
        self.messages = Messages(self._api_client)
        self.servers = Servers(self._api_client)
        self.analysis = Analysis(self._api_client)
        self.files = Files(self._api_client)

    @property
    def config(self) -> ClientConfig:
        """The client configuration."""
        return self._config

    async def __aenter__(self) -> MailosaurClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._api_client.close()
