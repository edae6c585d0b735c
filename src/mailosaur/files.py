"""File download operations for the Mailosaur client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http import ApiClient


class Files:
    """Downloads of attachments and raw email source."""

    def __init__(self, api_client: ApiClient) -> None:
        self._api_client = api_client

    async def get_attachment(self, attachment_id: str) -> bytes:
        """Download a single attachment."""
        return await self._api_client.get_attachment(attachment_id)

    async def get_email(self, email_id: str) -> bytes:
        """Download the raw EML source of an email."""
        return await self._api_client.get_email_source(email_id)
