"""Validation utilities for the Mailosaur client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import SERVER_ID_LENGTH
from ..errors import InvalidRequestError

if TYPE_CHECKING:
    from ..types import SearchCriteria


def validate_server_id(server: str) -> None:
    """Validate server ID format.

    Args:
        server: The server ID to validate.

    Raises:
        InvalidRequestError: If the server ID is not exactly 8 characters.
    """
    if not server or len(server) != SERVER_ID_LENGTH:
        raise InvalidRequestError("Must provide a valid Server ID.")


def validate_search_criteria(criteria: SearchCriteria) -> None:
    """Validate that search criteria will match on something.

    Args:
        criteria: The criteria to validate.

    Raises:
        InvalidRequestError: If no content field is set.
    """
    if not criteria.has_content():
        raise InvalidRequestError(
            "Search criteria must include at least one of sent_from, sent_to, subject or body."
        )
