"""Errors raised by the suggestion entry points."""

from __future__ import annotations

from enum import Enum


class InvalidInputReason(str, Enum):
    """Why a suggestion could not be produced."""

    INVALID_ACCOUNT_NUMBER = "invalid_account_number"
    REGISTRY_UNAVAILABLE = "registry_unavailable"


class InvalidInputError(ValueError):
    """Raised when a suggestion cannot proceed.

    ``reason`` separates a bad account number (caller should fix the input)
    from missing bank data (caller should retry later or fix configuration).
    """

    def __init__(self, message: str, reason: InvalidInputReason):
        super().__init__(message)
        self.message = message
        self.reason = reason

    @classmethod
    def account_number(cls, message: str) -> "InvalidInputError":
        return cls(message, InvalidInputReason.INVALID_ACCOUNT_NUMBER)

    @classmethod
    def registry_unavailable(cls, message: str) -> "InvalidInputError":
        return cls(message, InvalidInputReason.REGISTRY_UNAVAILABLE)
