"""Tests for message search polling and message operations."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from mailosaur.errors import HttpError, InvalidRequestError, SearchTimeoutError
from mailosaur.http.api_client import ApiClient
from mailosaur.messages import SEARCH_TIMEOUT_MESSAGE, Messages, parse_delay_schedule
from mailosaur.types import (
    ClientConfig,
    Message,
    MessageListResult,
    MessageSummary,
    SearchCriteria,
)

SERVER = "abcd1234"

EMPTY = {"items": []}
FOUND = {
    "items": [
        {
            "id": "msg-1",
            "subject": "Password reset",
            "from": [{"name": "App", "email": "noreply@example.com"}],
            "to": [{"name": "User", "email": "user@abcd1234.mailosaur.net"}],
            "received": "2024-05-01T10:00:00Z",
            "attachments": 0,
            "server": SERVER,
        }
    ]
}


class FakeClock:
    """Deterministic monotonic clock advanced by sleeps and requests."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[int] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, ms: int) -> None:
        self.sleeps.append(ms)
        self.now += ms / 1000


def make_messages(
    responses: list[httpx.Response],
    clock: FakeClock | None = None,
    request_duration_ms: int = 0,
) -> tuple[Messages, list[dict[str, Any]]]:
    """Build Messages over an API client whose transport replays responses."""
    api_client = ApiClient(ClientConfig(api_key="test-api-key", base_url="https://test.example.com"))
    calls: list[dict[str, Any]] = []

    async def mock_request(method, path, json=None, params=None):
        calls.append({"method": method, "path": path, "json": json, "params": params})
        if clock is not None:
            clock.now += request_duration_ms / 1000
        return responses[min(len(calls) - 1, len(responses) - 1)]

    mock_client = MagicMock()
    mock_client.is_closed = False
    mock_client.request = mock_request
    api_client._client = mock_client
    return Messages(api_client), calls


def search_response(data: dict[str, Any], delay: str | None = None) -> httpx.Response:
    headers = {"x-ms-delay": delay} if delay is not None else {}
    return httpx.Response(200, json=data, headers=headers)


@pytest.fixture
def clock() -> Iterator[FakeClock]:
    """Patch the poll loop's clock and sleep."""
    fake = FakeClock()
    with patch("mailosaur.messages.time") as mock_time, patch(
        "mailosaur.messages.sleep", new=fake.sleep
    ):
        mock_time.monotonic = fake.monotonic
        yield fake


class TestParseDelaySchedule:
    def test_parses_comma_separated_values(self) -> None:
        assert parse_delay_schedule("100,200,400") == [100, 200, 400]

    def test_tolerates_whitespace(self) -> None:
        assert parse_delay_schedule(" 250, 500 ") == [250, 500]

    def test_missing_header(self) -> None:
        assert parse_delay_schedule(None) is None
        assert parse_delay_schedule("") is None

    def test_ignores_trailing_units(self) -> None:
        assert parse_delay_schedule("1000ms, 250 ms") == [1000, 250]

    def test_skips_non_numeric_entries(self) -> None:
        assert parse_delay_schedule("soon,300") == [300]
        assert parse_delay_schedule("soon") is None

    def test_negative_values_count_as_zero(self) -> None:
        assert parse_delay_schedule("-5,100") == [0, 100]


class TestSearchWithoutTimeout:
    """A search without a timeout is a single request."""

    @pytest.mark.asyncio
    async def test_single_request_returns_empty_result(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY, "100")], clock)

        result = await messages.search(SERVER, SearchCriteria(sent_to="x@example.com"))

        assert isinstance(result, MessageListResult)
        assert result.items == []
        assert len(calls) == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_zero_timeout_is_single_request(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY)], clock)

        result = await messages.search(SERVER, SearchCriteria(subject="hi"), timeout=0)

        assert result.items == []
        assert len(calls) == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_request_shape(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(FOUND)], clock)
        received_after = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

        result = await messages.search(
            SERVER,
            SearchCriteria(sent_from="noreply@example.com", body="reset"),
            page=2,
            items_per_page=10,
            received_after=received_after,
        )

        assert calls[0]["method"] == "POST"
        assert calls[0]["path"] == "/api/messages/search"
        assert calls[0]["params"] == {
            "server": SERVER,
            "page": 2,
            "itemsPerPage": 10,
            "receivedAfter": "2024-05-01T09:00:00Z",
        }
        assert calls[0]["json"] == {
            "sentFrom": "noreply@example.com",
            "body": "reset",
            "match": "ALL",
        }
        assert result.page == 2
        assert result.items_per_page == 10
        assert isinstance(result.items[0], MessageSummary)
        assert result.items[0].subject == "Password reset"


class TestSearchPolling:
    """Tests for the bounded polling loop."""

    @pytest.mark.asyncio
    async def test_returns_first_non_empty_result(self, clock: FakeClock) -> None:
        messages, calls = make_messages(
            [search_response(EMPTY), search_response(EMPTY), search_response(FOUND)], clock
        )

        result = await messages.search(SERVER, SearchCriteria(subject="reset"), timeout=10000)

        assert [item.id for item in result.items] == ["msg-1"]
        assert len(calls) == 3
        assert clock.sleeps == [1000, 1000]

    @pytest.mark.asyncio
    async def test_found_on_first_attempt_does_not_sleep(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(FOUND, "100")], clock)

        result = await messages.search(SERVER, SearchCriteria(subject="reset"), timeout=10000)

        assert len(result.items) == 1
        assert len(calls) == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_delay_schedule_repeats_last_value(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY, "100,200,400")], clock)

        result = await messages.search(
            SERVER, SearchCriteria(subject="never"), timeout=2000, error_on_timeout=False
        )

        assert result.items == []
        assert clock.sleeps == [100, 200, 400, 400, 400, 400]
        assert len(calls) == 7

    @pytest.mark.asyncio
    async def test_default_delay_without_header(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY)], clock)

        with pytest.raises(SearchTimeoutError):
            await messages.search(SERVER, SearchCriteria(subject="never"), timeout=3500)

        assert clock.sleeps == [1000, 1000, 1000]
        assert len(calls) == 4

    @pytest.mark.asyncio
    async def test_delay_equal_to_budget_still_sleeps(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY)], clock)

        with pytest.raises(SearchTimeoutError):
            await messages.search(SERVER, SearchCriteria(subject="never"), timeout=1000)

        # 0 + 1000 is within budget; 1000 + 1000 is not
        assert clock.sleeps == [1000]
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_stops_without_sleeping_when_delay_exceeds_budget(
        self, clock: FakeClock
    ) -> None:
        messages, calls = make_messages([search_response(EMPTY)], clock)

        with pytest.raises(SearchTimeoutError) as exc_info:
            await messages.search(SERVER, SearchCriteria(subject="never"), timeout=999)

        assert clock.sleeps == []
        assert len(calls) == 1
        assert str(exc_info.value) == SEARCH_TIMEOUT_MESSAGE
        assert exc_info.value.error_type == "search_timeout"

    def test_timeout_message_text(self) -> None:
        assert SEARCH_TIMEOUT_MESSAGE == (
            "No matching messages found in time. By default, only messages received in "
            "the last hour are checked (use receivedAfter to override this)."
        )

    @pytest.mark.asyncio
    async def test_error_on_timeout_false_returns_empty_result(self, clock: FakeClock) -> None:
        messages, _ = make_messages([search_response(EMPTY, "500")], clock)

        result = await messages.search(
            SERVER, SearchCriteria(sent_from="neverfound@example.com"), timeout=1, error_on_timeout=False
        )

        assert result.items == []
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_slow_requests_reduce_attempts(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY, "500")], clock, request_duration_ms=600)

        with pytest.raises(SearchTimeoutError):
            await messages.search(SERVER, SearchCriteria(subject="never"), timeout=1500)

        # 600 + 500 fits; after the second request 1700 + 500 does not
        assert len(calls) == 2
        assert clock.sleeps == [500]

    @pytest.mark.asyncio
    async def test_schedule_taken_from_first_response_that_has_one(
        self, clock: FakeClock
    ) -> None:
        messages, calls = make_messages(
            [
                search_response(EMPTY),
                search_response(EMPTY, "100,300"),
                search_response(EMPTY, "50"),
                search_response(FOUND),
            ],
            clock,
        )

        result = await messages.search(SERVER, SearchCriteria(subject="reset"), timeout=10000)

        assert len(result.items) == 1
        assert clock.sleeps == [1000, 300, 300]

    @pytest.mark.asyncio
    async def test_non_monotonic_schedule_is_followed(self, clock: FakeClock) -> None:
        messages, _ = make_messages([search_response(EMPTY, "300,100")], clock)

        await messages.search(SERVER, SearchCriteria(subject="x"), timeout=750, error_on_timeout=False)

        assert clock.sleeps == [300, 100, 100, 100, 100]

    @pytest.mark.asyncio
    async def test_malformed_header_falls_back_to_default_delay(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY, "later")], clock)

        result = await messages.search(
            SERVER, SearchCriteria(subject="never"), timeout=1500, error_on_timeout=False
        )

        assert result.items == []
        assert clock.sleeps == [1000]
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_header_with_units_is_followed(self, clock: FakeClock) -> None:
        messages, calls = make_messages([search_response(EMPTY, "1000ms")], clock)

        with pytest.raises(SearchTimeoutError):
            await messages.search(SERVER, SearchCriteria(subject="never"), timeout=100)

        assert clock.sleeps == []
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_zero_delay_still_goes_through_sleep(self, clock: FakeClock) -> None:
        messages, calls = make_messages(
            [search_response(EMPTY, "0")], clock, request_duration_ms=100
        )

        await messages.search(
            SERVER, SearchCriteria(subject="never"), timeout=250, error_on_timeout=False
        )

        assert clock.sleeps == [0, 0]
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_http_error_aborts_without_retry(self, clock: FakeClock) -> None:
        messages, calls = make_messages(
            [search_response(EMPTY), httpx.Response(500, text="boom")], clock
        )

        with pytest.raises(HttpError) as exc_info:
            await messages.search(SERVER, SearchCriteria(subject="reset"), timeout=10000)

        assert exc_info.value.http_status_code == 500
        assert len(calls) == 2
        assert clock.sleeps == [1000]

    @pytest.mark.asyncio
    async def test_each_call_starts_fresh(self, clock: FakeClock) -> None:
        messages, _ = make_messages([search_response(EMPTY, "100,200")], clock)

        await messages.search(SERVER, SearchCriteria(subject="x"), timeout=150, error_on_timeout=False)
        await messages.search(SERVER, SearchCriteria(subject="x"), timeout=150, error_on_timeout=False)

        assert clock.sleeps == [100, 100]


class TestSearchValidation:
    @pytest.mark.asyncio
    async def test_empty_criteria_fails_before_request(self) -> None:
        messages, calls = make_messages([search_response(FOUND)])

        with pytest.raises(InvalidRequestError) as exc_info:
            await messages.search(SERVER, SearchCriteria())

        assert exc_info.value.error_type == "invalid_request"
        assert calls == []


class TestGet:
    """Tests for Messages.get."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("server", ["", "abc", "abcd12345"])
    async def test_invalid_server_id(self, server: str) -> None:
        messages, calls = make_messages([search_response(FOUND)])

        with pytest.raises(InvalidRequestError) as exc_info:
            await messages.get(server, SearchCriteria(subject="reset"))

        assert "Must provide a valid Server ID." in str(exc_info.value)
        assert calls == []

    @pytest.mark.asyncio
    async def test_searches_then_fetches_first_match(self) -> None:
        messages = Messages(MagicMock())
        summary = MessageSummary(id="msg-1")
        message = Message(id="msg-1", subject="Password reset")
        messages.search = AsyncMock(return_value=MessageListResult(items=[summary]))  # type: ignore[method-assign]
        messages.get_by_id = AsyncMock(return_value=message)  # type: ignore[method-assign]

        before = datetime.now(timezone.utc)
        result = await messages.get(SERVER, SearchCriteria(sent_to="user@example.com"))

        assert result is message
        messages.get_by_id.assert_awaited_once_with("msg-1")
        kwargs = messages.search.await_args.kwargs
        assert kwargs["page"] == 0
        assert kwargs["items_per_page"] == 1
        assert kwargs["timeout"] == 10000
        lookback = before - kwargs["received_after"]
        assert timedelta(minutes=59) < lookback <= timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_propagates_search_timeout(self) -> None:
        messages = Messages(MagicMock())
        messages.search = AsyncMock(side_effect=SearchTimeoutError(SEARCH_TIMEOUT_MESSAGE))  # type: ignore[method-assign]
        messages.get_by_id = AsyncMock()  # type: ignore[method-assign]

        with pytest.raises(SearchTimeoutError):
            await messages.get(SERVER, SearchCriteria(subject="x"), timeout=500)

        messages.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_timeout_without_match_raises_search_timeout(self) -> None:
        messages, calls = make_messages([search_response(EMPTY)])

        with pytest.raises(SearchTimeoutError) as exc_info:
            await messages.get(SERVER, SearchCriteria(subject="x"), timeout=0)

        assert str(exc_info.value) == SEARCH_TIMEOUT_MESSAGE
        assert len(calls) == 1


class TestMessageOperations:
    """Tests for single-request message operations."""

    @pytest.mark.asyncio
    async def test_delete_twice_fails_second_time(self) -> None:
        messages, calls = make_messages(
            [httpx.Response(204), httpx.Response(404, text="")]
        )

        await messages.delete("msg-1")
        with pytest.raises(HttpError) as exc_info:
            await messages.delete("msg-1")

        assert exc_info.value.error_type == "item_not_found"
        assert [c["method"] for c in calls] == ["DELETE", "DELETE"]
        assert calls[0]["path"] == "/api/messages/msg-1"

    @pytest.mark.asyncio
    async def test_delete_all(self) -> None:
        messages, calls = make_messages([httpx.Response(204)])

        await messages.delete_all(SERVER)

        assert calls[0]["method"] == "DELETE"
        assert calls[0]["path"] == "/api/messages"
        assert calls[0]["params"] == {"server": SERVER}

    @pytest.mark.asyncio
    async def test_list_passes_pagination(self) -> None:
        messages, calls = make_messages([httpx.Response(200, json=FOUND)])

        result = await messages.list(SERVER, page=0, items_per_page=5)

        assert calls[0]["method"] == "GET"
        assert calls[0]["params"] == {"server": SERVER, "page": 0, "itemsPerPage": 5}
        assert result.items[0].id == "msg-1"

    @pytest.mark.asyncio
    async def test_get_by_id_unexpected_status(self) -> None:
        messages, _ = make_messages([httpx.Response(204)])

        with pytest.raises(HttpError):
            await messages.get_by_id("msg-1")
