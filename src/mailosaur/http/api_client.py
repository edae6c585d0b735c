"""Unified HTTP API client for the Mailosaur client."""

from __future__ import annotations

from .analysis_client import AnalysisApiClient
from .base_client import BaseApiClient, encode_path_segment
from .file_client import FileApiClient
from .message_client import MessageApiClient
from .server_client import ServerApiClient


class ApiClient(MessageApiClient, ServerApiClient, AnalysisApiClient, FileApiClient):
    """HTTP client exposing every Mailosaur API operation.

    All resource clients share one underlying httpx.AsyncClient.
    """

    pass


__all__ = [
    "AnalysisApiClient",
    "ApiClient",
    "BaseApiClient",
    "FileApiClient",
    "MessageApiClient",
    "ServerApiClient",
    "encode_path_segment",
]
