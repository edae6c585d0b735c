"""HTTP client for the Mailosaur client.

This module provides HTTP clients for the Mailosaur API:
- ApiClient: Unified client with all operations
- BaseApiClient: Transport, authentication and HTTP error mapping
- MessageApiClient: Message operations
- ServerApiClient: Server operations
- AnalysisApiClient: Spam analysis
- FileApiClient: Attachment and raw email downloads
"""

from .api_client import (
    AnalysisApiClient,
    ApiClient,
    BaseApiClient,
    FileApiClient,
    MessageApiClient,
    ServerApiClient,
    encode_path_segment,
)

__all__ = [
    "AnalysisApiClient",
    "ApiClient",
    "BaseApiClient",
    "FileApiClient",
    "MessageApiClient",
    "ServerApiClient",
    "encode_path_segment",
]
