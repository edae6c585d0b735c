"""Server API client for the Mailosaur client."""

from __future__ import annotations

from typing import Any, cast

from ..types import Server, ServerCreateOptions
from ..utils.message_utils import parse_server
from .base_client import BaseApiClient, encode_path_segment


class ServerApiClient(BaseApiClient):
    """API client for server operations.

    Provides methods for creating, updating, and deleting servers.
    """

    def _serialize_server(self, server: Server) -> dict[str, Any]:
        """Serialize a Server to API format."""
        return {
            "id": server.id,
            "name": server.name,
            "users": server.users,
            "messages": server.messages,
        }

    async def list_servers(self) -> list[Server]:
        """List all servers available to the API key.

        Returns:
            List of servers.
        """
        response = await self._request("GET", "/api/servers")
        data = response.json()
        return [parse_server(item) for item in data.get("items") or []]

    async def create_server(self, options: ServerCreateOptions) -> Server:
        """Create a new server.

        Args:
            options: Options including the server name.

        Returns:
            The created server.
        """
        response = await self._request("POST", "/api/servers", json={"name": options.name})
        return parse_server(response.json())

    async def get_server(self, server_id: str) -> Server:
        """Get a server.

        Args:
            server_id: The server ID.

        Returns:
            The server.
        """
        encoded = encode_path_segment(server_id)
        response = await self._request("GET", f"/api/servers/{encoded}")
        return parse_server(response.json())

    async def get_server_password(self, server_id: str) -> str:
        """Get the SMTP/POP3 password for a server.

        Args:
            server_id: The server ID.

        Returns:
            The password.
        """
        encoded = encode_path_segment(server_id)
        response = await self._request("GET", f"/api/servers/{encoded}/password")
        return cast(str, response.json()["value"])

    async def update_server(self, server_id: str, server: Server) -> Server:
        """Update a server.

        Args:
            server_id: The server ID.
            server: The updated server.

        Returns:
            The server as stored after the update.
        """
        encoded = encode_path_segment(server_id)
        response = await self._request(
            "PUT", f"/api/servers/{encoded}", json=self._serialize_server(server)
        )
        return parse_server(response.json())

    async def delete_server(self, server_id: str) -> None:
        """Delete a server and every message it holds.

        Args:
            server_id: The server ID.
        """
        encoded = encode_path_segment(server_id)
        await self._request("DELETE", f"/api/servers/{encoded}", expected_status=204)
