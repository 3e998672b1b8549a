"""Predict the issuing banks of a Nigerian NUBAN account number."""

from nuban.banks.models import Bank
from nuban.prediction import (
    DEFAULT_POLICY,
    BankSuggestionService,
    InvalidInputError,
    InvalidInputReason,
    PrioritizationPolicy,
    apply_priority_filter,
    is_phone_number_format,
    is_valid_nuban_for_bank,
    suggest_possible_banks,
)

__version__ = "0.1.0"

__all__ = [
    "Bank",
    "BankSuggestionService",
    "PrioritizationPolicy",
    "DEFAULT_POLICY",
    "InvalidInputError",
    "InvalidInputReason",
    "suggest_possible_banks",
    "is_valid_nuban_for_bank",
    "apply_priority_filter",
    "is_phone_number_format",
]
