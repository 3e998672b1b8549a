"""Digit-string helpers shared by the bank records and the check-digit code."""

from __future__ import annotations

_DIGITS = frozenset("0123456789")


def strip_separators(value: str) -> str:
    """Remove spaces and hyphens."""
    return value.replace(" ", "").replace("-", "")


def is_ascii_digits(value: str) -> bool:
    # str.isdigit() accepts other Unicode digits such as "٣"
    return bool(value) and all(ch in _DIGITS for ch in value)
