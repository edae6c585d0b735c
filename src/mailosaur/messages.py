"""Message operations for the Mailosaur client."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .constants import (
    DEFAULT_GET_TIMEOUT_MS,
    DEFAULT_RECEIVED_AFTER_WINDOW,
    DEFAULT_SEARCH_DELAY_MS,
)
from .errors import SearchTimeoutError
from .utils import sleep
from .utils.validation import validate_search_criteria, validate_server_id

if TYPE_CHECKING:
    from .http import ApiClient
    from .types import (
        Message,
        MessageCreateOptions,
        MessageForwardOptions,
        MessageListResult,
        MessageReplyOptions,
        SearchCriteria,
    )

logger = logging.getLogger("mailosaur")

SEARCH_TIMEOUT_MESSAGE = (
    "No matching messages found in time. By default, only messages received in the "
    "last hour are checked (use receivedAfter to override this)."
)

# Leading integer of a header entry; trailing units such as "ms" are ignored
_LEADING_INT = re.compile(r"\s*-?\d+")


def parse_delay_schedule(header: str | None) -> list[int] | None:
    """Parse a comma-separated delay header into milliseconds.

    Args:
        header: Raw header value, e.g. '100,200,400'.

    Entries without a leading integer are skipped and negative values
    count as 0.

    Returns:
        The schedule, or None if the header is absent or has no usable entry.
    """
    if not header:
        return None
    schedule: list[int] = []
    for part in header.split(","):
        match = _LEADING_INT.match(part)
        if match:
            schedule.append(max(int(match.group()), 0))
    return schedule or None


@dataclass
class _PollState:
    """State owned by a single search call."""

    start_time: float
    poll_count: int = 0
    delay_schedule: list[int] | None = field(default=None)

    def observe(self, header: str | None) -> None:
        """Adopt the first delay schedule the server advertises."""
        if self.delay_schedule is None:
            self.delay_schedule = parse_delay_schedule(header)

    def next_delay(self) -> int:
        """Delay before the next attempt; the last entry repeats once exhausted."""
        schedule = self.delay_schedule or [DEFAULT_SEARCH_DELAY_MS]
        return schedule[min(self.poll_count, len(schedule) - 1)]

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.start_time) * 1000


class Messages:
    """Operations on messages held by Mailosaur servers.

    Example:
        ```python
        async with MailosaurClient(api_key="your-api-key") as client:
            criteria = SearchCriteria(sent_to="someone@abcd1234.mailosaur.net")
            message = await client.messages.get("abcd1234", criteria)
            print(message.subject)
        ```
    """

    def __init__(self, api_client: ApiClient) -> None:
        """Initialize message operations.

        Args:
            api_client: The API client for making requests.
        """
        self._api_client = api_client

    async def get(
        self,
        server: str,
        criteria: SearchCriteria,
        *,
        timeout: int = DEFAULT_GET_TIMEOUT_MS,
        received_after: datetime | None = None,
    ) -> Message:
        """Wait for a message matching the criteria and return it in full.

        Returns as soon as a matching message is found. This is the most
        efficient way of looking up a message.

        Args:
            server: The 8-character ID of the server hosting the message.
            criteria: The search criteria to match against.
            timeout: How long to wait for a match, in milliseconds (default: 10000).
            received_after: Only match messages received after this time
                (default: one hour ago).

        Returns:
            The most recently received matching message.

        Raises:
            InvalidRequestError: If the server ID is invalid.
            SearchTimeoutError: If no match is found within the timeout.
            HttpError: If the API returns an error.
        """
        validate_server_id(server)
        if received_after is None:
            received_after = datetime.now(timezone.utc) - DEFAULT_RECEIVED_AFTER_WINDOW

        result = await self.search(
            server,
            criteria,
            page=0,
            items_per_page=1,
            timeout=timeout,
            received_after=received_after,
        )
        if not result.items:
            raise SearchTimeoutError(SEARCH_TIMEOUT_MESSAGE)
        return await self.get_by_id(result.items[0].id)

    async def get_by_id(self, message_id: str) -> Message:
        """Retrieve a single message by ID.

        Args:
            message_id: The message ID.

        Returns:
            The full message.
        """
        return await self._api_client.get_message(message_id)

    async def delete(self, message_id: str) -> None:
        """Permanently delete a message and its attachments.

        Deleting a message that no longer exists raises HttpError.

        Args:
            message_id: The message ID.
        """
        await self._api_client.delete_message(message_id)

    async def list(
        self,
        server: str,
        *,
        page: int | None = None,
        items_per_page: int | None = None,
        received_after: datetime | None = None,
    ) -> MessageListResult:
        """List message summaries, most recently received first.

        Args:
            server: The server ID.
            page: Page number, used together with items_per_page.
            items_per_page: Page size, between 1 and 1000 (server default: 50).
            received_after: Only include messages received after this time.

        Returns:
            MessageListResult with message summaries.
        """
        return await self._api_client.list_messages(
            server,
            page=page,
            items_per_page=items_per_page,
            received_after=received_after,
        )

    async def delete_all(self, server: str) -> None:
        """Permanently delete every message held by a server.

        Args:
            server: The server ID.
        """
        await self._api_client.delete_all_messages(server)

    async def search(
        self,
        server: str,
        criteria: SearchCriteria,
        *,
        page: int | None = None,
        items_per_page: int | None = None,
        timeout: int | None = None,
        received_after: datetime | None = None,
        error_on_timeout: bool = True,
    ) -> MessageListResult:
        """Search for message summaries matching the criteria.

        With no timeout a single request is made and its result returned,
        empty or not. With a timeout the search is repeated, waiting between
        attempts according to the server's advertised delay schedule, until
        at least one match is found or waiting again would exceed the timeout.

        Args:
            server: The server ID.
            criteria: The search criteria to match against.
            page: Page number, used together with items_per_page.
            items_per_page: Page size, between 1 and 1000 (server default: 50).
            timeout: How long to wait for a match, in milliseconds.
            received_after: Only include messages received after this time.
            error_on_timeout: If False, an empty result is returned instead of
                raising when the timeout is reached (default: True).

        Returns:
            MessageListResult with matching summaries.

        Raises:
            InvalidRequestError: If the criteria have no content fields.
            SearchTimeoutError: If no match is found in time and
                error_on_timeout is True.
            HttpError: If the API returns an error.
        """
        validate_search_criteria(criteria)
        state = _PollState(start_time=time.monotonic())

        while True:
            result, delay_header = await self._api_client.search_messages(
                server,
                criteria,
                page=page,
                items_per_page=items_per_page,
                received_after=received_after,
            )

            if not timeout or result.items:
                return result

            state.observe(delay_header)
            delay = state.next_delay()
            elapsed = state.elapsed_ms()

            if elapsed + delay > timeout:
                logger.debug(
                    "Search on server %s timed out after %d attempt(s) (%.0fms)",
                    server,
                    state.poll_count + 1,
                    elapsed,
                )
                if not error_on_timeout:
                    return result
                raise SearchTimeoutError(SEARCH_TIMEOUT_MESSAGE)

            logger.debug(
                "No match on server %s (attempt %d), retrying in %dms",
                server,
                state.poll_count + 1,
                delay,
            )
            await sleep(delay)
            state.poll_count += 1

    async def create(self, server: str, options: MessageCreateOptions) -> Message:
        """Create a message, optionally sending it to a verified address.

        Args:
            server: The server ID to create the message in.
            options: Message content and recipients.

        Returns:
            The created message.
        """
        return await self._api_client.create_message(server, options)

    async def forward(self, message_id: str, options: MessageForwardOptions) -> Message:
        """Forward a message to a verified address.

        Args:
            message_id: The message ID.
            options: Recipient and content to prepend.

        Returns:
            The forwarded message.
        """
        return await self._api_client.forward_message(message_id, options)

    async def reply(self, message_id: str, options: MessageReplyOptions) -> Message:
        """Reply to a message.

        Args:
            message_id: The message ID.
            options: Reply content.

        Returns:
            The reply message.
        """
        return await self._api_client.reply_to_message(message_id, options)
