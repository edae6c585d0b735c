"""File download API client for the Mailosaur client."""

from __future__ import annotations

from .base_client import BaseApiClient, encode_path_segment


class FileApiClient(BaseApiClient):
    """API client for downloading attachments and raw emails."""

    async def get_attachment(self, attachment_id: str) -> bytes:
        """Download an attachment.

        Args:
            attachment_id: The attachment ID.

        Returns:
            The attachment content.
        """
        encoded = encode_path_segment(attachment_id)
        response = await self._request("GET", f"/api/files/attachments/{encoded}")
        return response.content

    async def get_email_source(self, message_id: str) -> bytes:
        """Download the raw EML source of an email.

        Args:
            message_id: The email ID.

        Returns:
            The raw MIME content.
        """
        encoded = encode_path_segment(message_id)
        response = await self._request("GET", f"/api/files/email/{encoded}")
        return response.content
