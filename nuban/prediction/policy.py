"""Bank prioritization policy.

Tier membership only affects ranking, never validity:
- Tier 1: the most widely used banks, up to ``max_tier1_results``
- Tier 2: secondary banks, up to ``max_tier2_results``
- Others: only used to backfill up to ``minimum_suggestions``

A code listed in both tiers is ranked as Tier 1.

Phone-number format:
Several fintechs issue account numbers equal to the holder's mobile number
without its leading zero (0803... -> 803...). Those numbers do not satisfy the
NUBAN check digit, so when the first three digits are a Nigerian mobile prefix
the selector returns ``phone_number_bank_codes`` banks directly.

The two phone tables are configured independently. If a caller overrides
``valid_phone_prefixes`` without matching ``phone_number_bank_codes`` (or
supplies a registry without those banks), phone-shaped numbers silently fall
back to checksum validation. A policy with only one of the two tables
filled logs a warning when it is built.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nuban.banks.models import Bank
from nuban.core.config import Settings
from nuban.prediction.checksum import NUBAN_LENGTH, strip_separators

logger = logging.getLogger(__name__)

PHONE_PREFIX_LENGTH = 3

DEFAULT_TIER1_BANK_CODES = frozenset(
    {
        "011",  # First Bank of Nigeria
        "044",  # Access Bank
        "50211",  # Kuda Bank
        "057",  # Zenith Bank
        "058",  # GTBank
        "50515",  # Moniepoint
        "070",  # Fidelity Bank
        "033",  # United Bank for Africa
        "214",  # FCMB
        "232",  # Sterling Bank
        "035",  # Wema Bank
    }
)

DEFAULT_TIER2_BANK_CODES = frozenset(
    {
        "050",  # Ecobank
        "215",  # Unity Bank
        "082",  # Keystone Bank
        "032",  # Union Bank
        "076",  # Polaris Bank
        "221",  # Stanbic IBTC
        "068",  # Standard Chartered
        "023",  # Citibank
        "301",  # Jaiz Bank
        "101",  # Providus Bank
        "100",  # Suntrust Bank
        "302",  # TAJ Bank
        "303",  # Lotus Bank
    }
)

DEFAULT_PHONE_NUMBER_BANK_CODES = frozenset(
    {
        "999992",  # Opay
        "50515",  # Moniepoint
        "999991",  # Palmpay
        "214",  # FCMB
        "232",  # Sterling Bank
    }
)

DEFAULT_VALID_PHONE_PREFIXES = frozenset(
    {
        # MTN
        "703", "706", "803", "806", "810", "813", "814", "816", "903", "906", "913", "916",
        # Airtel
        "701", "708", "802", "808", "812", "901", "902", "904", "907", "911", "912",
        # Glo
        "705", "805", "807", "811", "815", "905", "915",
        # 9mobile
        "809", "817", "818", "908", "909",
    }
)


class PrioritizationPolicy(BaseModel):
    """Ranking and phone-number configuration for bank suggestions."""

    model_config = ConfigDict(frozen=True)

    tier1_codes: frozenset[str] = Field(
        default=DEFAULT_TIER1_BANK_CODES, description="Highest priority bank codes"
    )
    tier2_codes: frozenset[str] = Field(
        default=DEFAULT_TIER2_BANK_CODES, description="Medium priority bank codes"
    )
    phone_number_bank_codes: frozenset[str] = Field(
        default=DEFAULT_PHONE_NUMBER_BANK_CODES,
        description="Banks that issue phone numbers as account numbers",
    )
    valid_phone_prefixes: frozenset[str] = Field(
        default=DEFAULT_VALID_PHONE_PREFIXES,
        description="Nigerian mobile prefixes without the leading zero",
    )

    max_tier1_results: int = Field(default=4, ge=0, description="Tier 1 banks to include")
    max_tier2_results: int = Field(default=2, ge=0, description="Tier 2 banks to include")
    minimum_suggestions: int = Field(
        default=3, ge=0, description="Backfill with other banks up to this count"
    )
    maximum_suggestions: int = Field(default=6, ge=0, description="Cap on total suggestions")

    @field_validator(
        "tier1_codes",
        "tier2_codes",
        "phone_number_bank_codes",
        "valid_phone_prefixes",
        mode="before",
    )
    @classmethod
    def _casefold_codes(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, Iterable):
            return frozenset(str(code).strip().casefold() for code in value)
        return value

    @model_validator(mode="after")
    def _warn_on_unreachable_minimum(self) -> "PrioritizationPolicy":
        if self.max_tier1_results + self.max_tier2_results < self.minimum_suggestions:
            logger.warning(
                "Tier limits (%d + %d) are below minimum_suggestions (%d); "
                "results will lean on non-tiered banks",
                self.max_tier1_results,
                self.max_tier2_results,
                self.minimum_suggestions,
            )
        return self

    @model_validator(mode="after")
    def _warn_on_one_sided_phone_tables(self) -> "PrioritizationPolicy":
        if not self.has_consistent_phone_tables():
            logger.warning(
                "Only one phone table is configured (%d prefixes, %d bank codes); "
                "phone-shaped numbers will fall back to checksum validation",
                len(self.valid_phone_prefixes),
                len(self.phone_number_bank_codes),
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "PrioritizationPolicy":
        """Default code tables with the numeric limits taken from settings."""
        return cls(
            max_tier1_results=settings.MAX_TIER1_RESULTS,
            max_tier2_results=settings.MAX_TIER2_RESULTS,
            minimum_suggestions=settings.MINIMUM_SUGGESTIONS,
            maximum_suggestions=settings.MAXIMUM_SUGGESTIONS,
        )

    def is_tier1(self, code: str) -> bool:
        return code.casefold() in self.tier1_codes

    def is_tier2(self, code: str) -> bool:
        return code.casefold() in self.tier2_codes

    def is_phone_number_bank(self, code: str) -> bool:
        return code.casefold() in self.phone_number_bank_codes

    def has_consistent_phone_tables(self) -> bool:
        """True when both phone tables are empty or both are non-empty.

        This does not check that the prefixes and bank codes belong together,
        or that the registry holds any of the phone banks.
        """
        return bool(self.valid_phone_prefixes) == bool(self.phone_number_bank_codes)


DEFAULT_POLICY = PrioritizationPolicy()


def is_phone_number_format(
    account_number: str | None, policy: PrioritizationPolicy = DEFAULT_POLICY
) -> bool:
    """
    Check whether an account number looks like a mobile number.

    Args:
        account_number: Account number; spaces and hyphens are ignored
        policy: Supplies the mobile prefixes

    Returns:
        True if it is 10 characters long and starts with a known prefix
    """
    if not account_number:
        return False

    account_number = strip_separators(account_number)
    if len(account_number) != NUBAN_LENGTH:
        return False

    return account_number[:PHONE_PREFIX_LENGTH].casefold() in policy.valid_phone_prefixes


def apply_priority_filter(
    candidates: Iterable[Bank], policy: PrioritizationPolicy = DEFAULT_POLICY
) -> List[Bank]:
    """
    Rank and trim checksum-valid candidates.

    Tier 1 banks come first, then Tier 2, each truncated to its limit and
    kept in input order. Other banks are appended only while the total is
    below ``minimum_suggestions``. The result never exceeds
    ``maximum_suggestions``.

    Args:
        candidates: Banks that passed checksum validation, in registry order
        policy: Tier tables and limits

    Returns:
        Ranked suggestions, possibly empty
    """
    tier1: List[Bank] = []
    tier2: List[Bank] = []
    others: List[Bank] = []
    for bank in candidates:
        if policy.is_tier1(bank.code):
            tier1.append(bank)
        elif policy.is_tier2(bank.code):
            tier2.append(bank)
        else:
            others.append(bank)

    result = tier1[: policy.max_tier1_results] + tier2[: policy.max_tier2_results]

    if len(result) < policy.minimum_suggestions:
        result.extend(others[: policy.minimum_suggestions - len(result)])

    return result[: policy.maximum_suggestions]
