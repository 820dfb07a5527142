"""Stateless parsers used by the request schemas."""

import re
import uuid
from datetime import date, time

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d{2}:\d{2}:\d{2}")


def parse_date(value: str) -> date:
    """Strict ``YYYY-MM-DD``; unpadded months or days are rejected."""
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValueError("invalid date format, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("invalid date format, expected YYYY-MM-DD")


def parse_time(value: str) -> time:
    """Strict ``HH:MM:SS`` on a 24-hour clock."""
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise ValueError("invalid time format, expected HH:MM:SS")
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise ValueError("invalid time format, expected HH:MM:SS")


def parse_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise ValueError("invalid uuid")
