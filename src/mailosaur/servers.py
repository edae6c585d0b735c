"""Server operations for the Mailosaur client."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http import ApiClient
    from .types import Server, ServerCreateOptions


class Servers:
    """Operations on Mailosaur servers."""

    def __init__(self, api_client: ApiClient) -> None:
        """Initialize server operations.

        Args:
            api_client: The API client for making requests.
        """
        self._api_client = api_client

    async def list(self) -> list[Server]:
        """List all servers available to the API key."""
        return await self._api_client.list_servers()

    async def create(self, options: ServerCreateOptions) -> Server:
        """Create a new server.

        Args:
            options: Options including the server name.

        Returns:
            The created server.
        """
        return await self._api_client.create_server(options)

    async def get(self, server_id: str) -> Server:
        """Retrieve a server by ID."""
        return await self._api_client.get_server(server_id)

    async def get_password(self, server_id: str) -> str:
        """Retrieve the SMTP/POP3 password for a server."""
        return await self._api_client.get_server_password(server_id)

    async def update(self, server_id: str, server: Server) -> Server:
        """Update a server's name or users.

        Args:
            server_id: The server ID.
            server: The updated server.

        Returns:
            The server as stored after the update.
        """
        return await self._api_client.update_server(server_id, server)

    async def delete(self, server_id: str) -> None:
        """Permanently delete a server and all of its messages."""
        await self._api_client.delete_server(server_id)

    def generate_email_address(self, server_id: str) -> str:
        """Generate a random email address that delivers to a server.

        No request is made; any local part is accepted by the server.

        Args:
            server_id: The server ID.

        Returns:
            An address of the form '<random>@<server_id>.<smtp_host>'.
        """
        host = self._api_client.config.smtp_host
        return f"{uuid.uuid4().hex[:10]}@{server_id}.{host}"
