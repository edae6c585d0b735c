"""Tests for utility functions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from mailosaur.errors import InvalidRequestError
from mailosaur.types import SearchCriteria
from mailosaur.utils import format_iso_timestamp, parse_iso_timestamp, sleep
from mailosaur.utils.validation import validate_search_criteria, validate_server_id


class TestParseIsoTimestamp:
    def test_z_suffix(self) -> None:
        result = parse_iso_timestamp("2024-01-15T12:30:45Z")
        assert result == datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

    def test_offset(self) -> None:
        result = parse_iso_timestamp("2024-01-15T12:30:45+02:00")
        assert result.utcoffset() == timedelta(hours=2)

    def test_fractional_seconds(self) -> None:
        result = parse_iso_timestamp("2024-01-15T12:30:45.123Z")
        assert result.microsecond == 123000


class TestFormatIsoTimestamp:
    def test_utc_uses_z_suffix(self) -> None:
        value = datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)
        assert format_iso_timestamp(value) == "2024-01-15T12:30:45Z"

    def test_naive_is_treated_as_utc(self) -> None:
        assert format_iso_timestamp(datetime(2024, 1, 15)) == "2024-01-15T00:00:00Z"

    def test_other_offsets_are_kept(self) -> None:
        value = datetime(2024, 1, 15, tzinfo=timezone(timedelta(hours=-5)))
        assert format_iso_timestamp(value) == "2024-01-15T00:00:00-05:00"


class TestSleep:
    @pytest.mark.asyncio
    async def test_sleep_converts_milliseconds(self) -> None:
        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await sleep(1500)
        mock_sleep.assert_awaited_once_with(1.5)

    @pytest.mark.asyncio
    async def test_non_positive_delay_still_yields(self) -> None:
        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await sleep(-50)
        mock_sleep.assert_awaited_once_with(0)


class TestValidation:
    def test_valid_server_id(self) -> None:
        validate_server_id("abcd1234")

    @pytest.mark.parametrize("server", ["", "abcd123", "abcd12345"])
    def test_invalid_server_id(self, server: str) -> None:
        with pytest.raises(InvalidRequestError, match="Must provide a valid Server ID."):
            validate_server_id(server)

    def test_empty_criteria(self) -> None:
        with pytest.raises(InvalidRequestError):
            validate_search_criteria(SearchCriteria())

    def test_criteria_with_content(self) -> None:
        validate_search_criteria(SearchCriteria(sent_to="someone@example.com"))
