"""Bank suggestion for NUBAN account numbers."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List, Optional, Sequence

import structlog
from pydantic import BaseModel, Field

from nuban.banks.models import Bank
from nuban.banks.providers import BankDataError
from nuban.banks.registry import CachedBankRegistry, get_bank_registry
from nuban.core.config import get_settings
from nuban.prediction.checksum import is_nuban_shaped, is_valid_nuban_for_bank, strip_separators
from nuban.prediction.errors import InvalidInputError
from nuban.prediction.policy import (
    DEFAULT_POLICY,
    PrioritizationPolicy,
    apply_priority_filter,
    is_phone_number_format,
)

logger = structlog.get_logger()


def normalize_account_number(account_number: str | None) -> str:
    """
    Strip separators and check the NUBAN shape.

    Raises:
        InvalidInputError: If the input is blank or not exactly 10 digits
    """
    if account_number is None or not account_number.strip():
        raise InvalidInputError.account_number("Account number cannot be null or empty.")

    normalized = strip_separators(account_number)
    if not is_nuban_shaped(normalized):
        raise InvalidInputError.account_number("Account number must be exactly 10 digits.")
    return normalized


class SuggestionMode(str, Enum):
    """How a suggestion was produced."""

    PHONE_NUMBER = "phone_number"  # phone-bank short-circuit, no checksum
    CHECKSUM = "checksum"


class BankSuggestion(BaseModel):
    """Suggested banks together with the path that produced them."""

    mode: SuggestionMode
    banks: List[Bank] = Field(default_factory=list)


def select_bank_suggestion(
    account_number: str | None,
    banks: Sequence[Bank],
    policy: PrioritizationPolicy = DEFAULT_POLICY,
) -> BankSuggestion:
    """
    Suggest the banks that could have issued an account number.

    Phone-shaped numbers return every registry bank listed in
    ``policy.phone_number_bank_codes`` without checksum validation or
    ranking. If the registry holds none of those banks, the number is
    validated like any other and the mode is ``CHECKSUM``.

    Args:
        account_number: Raw account number; spaces and hyphens are ignored
        banks: Registry to check against, in registry order
        policy: Ranking and phone-number configuration

    Returns:
        Suggestion with the mode actually used; banks may be empty

    Raises:
        InvalidInputError: If the account number is malformed or the registry is empty
    """
    account_number = normalize_account_number(account_number)

    if not banks:
        raise InvalidInputError.registry_unavailable(
            "Unable to retrieve banks from the data source."
        )

    if is_phone_number_format(account_number, policy):
        phone_number_banks = [bank for bank in banks if policy.is_phone_number_bank(bank.code)]
        if phone_number_banks:
            logger.debug(
                "suggest.phone_number_format",
                prefix=account_number[:3],
                count=len(phone_number_banks),
            )
            return BankSuggestion(mode=SuggestionMode.PHONE_NUMBER, banks=phone_number_banks)

        logger.warning(
            "suggest.phone_banks_missing",
            prefix=account_number[:3],
            registry_size=len(banks),
        )

    possible_banks = [bank for bank in banks if is_valid_nuban_for_bank(account_number, bank.code)]
    result = apply_priority_filter(possible_banks, policy)
    logger.debug(
        "suggest.checksum",
        matched=len(possible_banks),
        returned=len(result),
    )
    return BankSuggestion(mode=SuggestionMode.CHECKSUM, banks=result)


def select_possible_banks(
    account_number: str | None,
    banks: Sequence[Bank],
    policy: PrioritizationPolicy = DEFAULT_POLICY,
) -> List[Bank]:
    """Suggested banks only; see ``select_bank_suggestion``."""
    return select_bank_suggestion(account_number, banks, policy).banks


class BankSuggestionService:
    """Suggests banks for account numbers using a cached registry."""

    def __init__(
        self,
        registry: CachedBankRegistry,
        policy: Optional[PrioritizationPolicy] = None,
    ):
        """
        Initialize the service.

        Args:
            registry: Cached registry used for every suggestion
            policy: Default policy when a call does not supply one
        """
        self.registry = registry
        self.policy = policy or DEFAULT_POLICY

    async def get_banks(self) -> Sequence[Bank]:
        """
        Load the registry, mapping provider failures to InvalidInputError.

        Raises:
            InvalidInputError: If the registry cannot be loaded or is empty
        """
        try:
            banks = await self.registry.get_banks()
        except BankDataError as e:
            logger.error(
                "suggest.registry_unavailable",
                source=self.registry.provider.get_source_name(),
                error=str(e),
            )
            raise InvalidInputError.registry_unavailable(
                f"Unable to retrieve banks from the data source: {e}"
            ) from e

        if not banks:
            raise InvalidInputError.registry_unavailable(
                "Unable to retrieve banks from the data source."
            )
        return banks

    async def suggest(
        self,
        account_number: str | None,
        policy: Optional[PrioritizationPolicy] = None,
    ) -> BankSuggestion:
        """
        Suggest banks and report whether the phone-number path was taken.

        The account number is validated before the registry is touched.

        Raises:
            InvalidInputError: If the account number is malformed or no bank data is available
        """
        normalized = normalize_account_number(account_number)
        banks = await self.get_banks()
        suggestion = select_bank_suggestion(normalized, banks, policy or self.policy)
        logger.info(
            "suggest.completed",
            mode=suggestion.mode.value,
            suggestions=[bank.code for bank in suggestion.banks],
        )
        return suggestion

    async def suggest_possible_banks(
        self,
        account_number: str | None,
        policy: Optional[PrioritizationPolicy] = None,
    ) -> List[Bank]:
        """
        Suggest the banks that could have issued an account number.

        Raises:
            InvalidInputError: If the account number is malformed or no bank data is available
        """
        suggestion = await self.suggest(account_number, policy)
        return suggestion.banks


@lru_cache(maxsize=1)
def get_suggestion_service() -> BankSuggestionService:
    """Return the process-wide suggestion service configured from settings."""
    return BankSuggestionService(
        get_bank_registry(), PrioritizationPolicy.from_settings(get_settings())
    )


async def suggest_possible_banks(
    account_number: str | None, policy: Optional[PrioritizationPolicy] = None
) -> List[Bank]:
    """Suggest banks for an account number using the configured registry."""
    return await get_suggestion_service().suggest_possible_banks(account_number, policy)
