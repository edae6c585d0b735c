"""Message analysis operations for the Mailosaur client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http import ApiClient
    from .types import SpamAnalysisResult


class Analysis:
    """Analysis of received messages."""

    def __init__(self, api_client: ApiClient) -> None:
        self._api_client = api_client

    async def spam(self, email_id: str) -> SpamAnalysisResult:
        """Perform spam analysis on an email.

        Args:
            email_id: The email ID.

        Returns:
            SpamAnalysisResult with SpamAssassin rules and overall score.
        """
        return await self._api_client.get_spam_analysis(email_id)
