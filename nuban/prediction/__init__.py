"""NUBAN check-digit validation and bank suggestion."""

from nuban.prediction.checksum import (
    calculate_check_digit,
    generate_nuban,
    is_valid_nuban_for_bank,
    to_six_digit_bank_code,
)
from nuban.prediction.errors import InvalidInputError, InvalidInputReason
from nuban.prediction.policy import (
    DEFAULT_POLICY,
    PrioritizationPolicy,
    apply_priority_filter,
    is_phone_number_format,
)
from nuban.prediction.selector import (
    BankSuggestionService,
    get_suggestion_service,
    BankSuggestion,
    SuggestionMode,
    normalize_account_number,
    select_bank_suggestion,
    select_possible_banks,
    suggest_possible_banks,
)

__all__ = [
    # Checksum
    "is_valid_nuban_for_bank",
    "calculate_check_digit",
    "to_six_digit_bank_code",
    "generate_nuban",
    # Policy
    "PrioritizationPolicy",
    "DEFAULT_POLICY",
    "apply_priority_filter",
    "is_phone_number_format",
    # Selector
    "BankSuggestionService",
    "get_suggestion_service",
    "BankSuggestion",
    "SuggestionMode",
    "normalize_account_number",
    "select_bank_suggestion",
    "select_possible_banks",
    "suggest_possible_banks",
    # Errors
    "InvalidInputError",
    "InvalidInputReason",
]
