"""Message API client for the Mailosaur client."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ..constants import DELAY_HEADER
from ..types import (
    Message,
    MessageCreateOptions,
    MessageForwardOptions,
    MessageListResult,
    MessageReplyOptions,
    SearchCriteria,
)
from ..utils.datetime_utils import format_iso_timestamp
from ..utils.message_utils import (
    parse_message,
    parse_message_list_result,
    serialize_message_options,
    serialize_search_criteria,
)
from .base_client import BaseApiClient, encode_path_segment


def _list_params(
    server: str,
    page: int | None,
    items_per_page: int | None,
    received_after: datetime | None,
) -> dict[str, Any]:
    """Build query parameters shared by the list and search endpoints."""
    params: dict[str, Any] = {"server": server}
    if page is not None:
        params["page"] = page
    if items_per_page is not None:
        params["itemsPerPage"] = items_per_page
    if received_after is not None:
        params["receivedAfter"] = format_iso_timestamp(received_after)
    return params


class MessageApiClient(BaseApiClient):
    """API client for message operations.

    Each method issues exactly one request.
    """

    async def get_message(self, message_id: str) -> Message:
        """Get a single message.

        Args:
            message_id: The message ID.

        Returns:
            The full message.
        """
        encoded = encode_path_segment(message_id)
        response = await self._request("GET", f"/api/messages/{encoded}")
        return parse_message(response.json())

    async def delete_message(self, message_id: str) -> None:
        """Delete a message.

        Args:
            message_id: The message ID.
        """
        encoded = encode_path_segment(message_id)
        await self._request("DELETE", f"/api/messages/{encoded}", expected_status=204)

    async def list_messages(
        self,
        server: str,
        *,
        page: int | None = None,
        items_per_page: int | None = None,
        received_after: datetime | None = None,
    ) -> MessageListResult:
        """List message summaries held by a server.

        Args:
            server: The server ID.
            page: Page number.
            items_per_page: Page size (1-1000).
            received_after: Only include messages received after this time.

        Returns:
            MessageListResult with summaries, most recent first.
        """
        params = _list_params(server, page, items_per_page, received_after)
        response = await self._request("GET", "/api/messages", params=params)
        return parse_message_list_result(response.json(), page, items_per_page)

    async def delete_all_messages(self, server: str) -> None:
        """Delete every message held by a server.

        Args:
            server: The server ID.
        """
        await self._request(
            "DELETE", "/api/messages", params={"server": server}, expected_status=204
        )

    async def search_messages(
        self,
        server: str,
        criteria: SearchCriteria,
        *,
        page: int | None = None,
        items_per_page: int | None = None,
        received_after: datetime | None = None,
    ) -> tuple[MessageListResult, str | None]:
        """Run one search request.

        Args:
            server: The server ID.
            criteria: Search criteria.
            page: Page number.
            items_per_page: Page size (1-1000).
            received_after: Only include messages received after this time.

        Returns:
            The result and the raw delay schedule header (None when absent).
        """
        params = _list_params(server, page, items_per_page, received_after)
        response = await self._request(
            "POST",
            "/api/messages/search",
            json=serialize_search_criteria(criteria),
            params=params,
        )
        result = parse_message_list_result(response.json(), page, items_per_page)
        return result, response.headers.get(DELAY_HEADER)

    async def create_message(self, server: str, options: MessageCreateOptions) -> Message:
        """Create (and optionally send) a message.

        Args:
            server: The server ID to create the message in.
            options: Message content and recipients.

        Returns:
            The created message.
        """
        response = await self._request(
            "POST",
            "/api/messages",
            json=serialize_message_options(options),
            params={"server": server},
        )
        return parse_message(response.json())

    async def forward_message(self, message_id: str, options: MessageForwardOptions) -> Message:
        """Forward a message to a verified address.

        Args:
            message_id: The message ID.
            options: Recipient and content to prepend.

        Returns:
            The forwarded message.
        """
        encoded = encode_path_segment(message_id)
        response = await self._request(
            "POST", f"/api/messages/{encoded}/forward", json=serialize_message_options(options)
        )
        return parse_message(response.json())

    async def reply_to_message(self, message_id: str, options: MessageReplyOptions) -> Message:
        """Reply to a message.

        Args:
            message_id: The message ID.
            options: Reply content.

        Returns:
            The reply message.
        """
        encoded = encode_path_segment(message_id)
        response = await self._request(
            "POST", f"/api/messages/{encoded}/reply", json=serialize_message_options(options)
        )
        return parse_message(response.json())
