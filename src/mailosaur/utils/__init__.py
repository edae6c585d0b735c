"""Utility functions for the Mailosaur client."""

from .datetime_utils import format_iso_timestamp, parse_iso_timestamp
from .sleep import sleep

__all__ = ["format_iso_timestamp", "parse_iso_timestamp", "sleep"]
