"""Analysis API client for the Mailosaur client."""

from __future__ import annotations

from ..types import SpamAnalysisResult
from ..utils.message_utils import parse_spam_analysis_result
from .base_client import BaseApiClient, encode_path_segment


class AnalysisApiClient(BaseApiClient):
    """API client for message analysis operations."""

    async def get_spam_analysis(self, message_id: str) -> SpamAnalysisResult:
        """Run spam analysis against an email.

        Args:
            message_id: The email ID.

        Returns:
            SpamAnalysisResult with the triggered rules and overall score.
        """
        encoded = encode_path_segment(message_id)
        response = await self._request("GET", f"/api/analysis/spam/{encoded}")
        return parse_spam_analysis_result(response.json())
