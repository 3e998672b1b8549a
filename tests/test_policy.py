"""Tests for bank prioritization and phone-number detection."""

import logging

import pytest
from pydantic import ValidationError

from nuban.banks.models import Bank
from nuban.core.config import Settings
from nuban.prediction.policy import (
    DEFAULT_POLICY,
    PrioritizationPolicy,
    apply_priority_filter,
    is_phone_number_format,
)


def banks(*codes: str) -> list[Bank]:
    return [Bank(name=f"Bank {code}", code=code) for code in codes]


TIER1 = ["011", "044", "057", "058", "070"]
TIER2 = ["050", "215", "082", "032", "076"]
OTHERS = ["030", "063", "102", "104", "565"]


class TestDefaultPolicy:
    """Test the documented defaults."""

    def test_limits(self):
        assert DEFAULT_POLICY.max_tier1_results == 4
        assert DEFAULT_POLICY.max_tier2_results == 2
        assert DEFAULT_POLICY.minimum_suggestions == 3
        assert DEFAULT_POLICY.maximum_suggestions == 6

    def test_code_tables(self):
        assert DEFAULT_POLICY.is_tier1("058")
        assert DEFAULT_POLICY.is_tier1("50515")
        assert DEFAULT_POLICY.is_tier2("221")
        assert DEFAULT_POLICY.is_phone_number_bank("999992")
        assert DEFAULT_POLICY.is_phone_number_bank("999991")
        assert not DEFAULT_POLICY.is_tier1("999992")
        assert "803" in DEFAULT_POLICY.valid_phone_prefixes
        assert "909" in DEFAULT_POLICY.valid_phone_prefixes
        assert len(DEFAULT_POLICY.valid_phone_prefixes) == 35

    def test_policy_is_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_POLICY.max_tier1_results = 10

    def test_from_settings(self):
        settings = Settings(MAX_TIER1_RESULTS=2, MAXIMUM_SUGGESTIONS=3)
        policy = PrioritizationPolicy.from_settings(settings)
        assert policy.max_tier1_results == 2
        assert policy.maximum_suggestions == 3
        assert policy.tier1_codes == DEFAULT_POLICY.tier1_codes

    def test_negative_limits_rejected(self):
        with pytest.raises(ValidationError):
            PrioritizationPolicy(max_tier1_results=-1)

    def test_codes_are_case_insensitive(self):
        policy = PrioritizationPolicy(tier1_codes={"ABC12"}, phone_number_bank_codes=["XyZ"])
        assert policy.is_tier1("abc12")
        assert policy.is_tier1("ABC12")
        assert policy.is_phone_number_bank("xyz")

    def test_unreachable_minimum_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="nuban.prediction.policy"):
            PrioritizationPolicy(max_tier1_results=1, max_tier2_results=0, minimum_suggestions=3)
        assert "minimum_suggestions" in caplog.text

    def test_phone_table_consistency(self):
        assert DEFAULT_POLICY.has_consistent_phone_tables()
        assert not PrioritizationPolicy(phone_number_bank_codes=set()).has_consistent_phone_tables()
        assert PrioritizationPolicy(
            phone_number_bank_codes=set(), valid_phone_prefixes=set()
        ).has_consistent_phone_tables()

    def test_one_sided_phone_tables_log_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="nuban.prediction.policy"):
            PrioritizationPolicy(phone_number_bank_codes=set())
        assert "Only one phone table" in caplog.text

    def test_matching_phone_tables_do_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="nuban.prediction.policy"):
            PrioritizationPolicy(phone_number_bank_codes=set(), valid_phone_prefixes=set())
            PrioritizationPolicy()
        assert "phone table" not in caplog.text


class TestPhoneNumberFormat:
    """Test phone-number detection."""

    def test_mobile_prefixes(self):
        assert is_phone_number_format("8031234567")
        assert is_phone_number_format("7061234567")
        assert is_phone_number_format("9091234567")

    def test_with_separators(self):
        assert is_phone_number_format("803-123-4567")
        assert is_phone_number_format("803 123 4567")

    def test_not_phone_shaped(self):
        assert not is_phone_number_format("0123456789")
        assert not is_phone_number_format("1234567896")
        assert not is_phone_number_format("803123456")  # 9 digits
        assert not is_phone_number_format("08031234567")  # leading zero, 11 digits
        assert not is_phone_number_format("")
        assert not is_phone_number_format(None)

    def test_custom_prefixes(self):
        policy = PrioritizationPolicy(valid_phone_prefixes={"123"})
        assert is_phone_number_format("1234567896", policy)
        assert not is_phone_number_format("8031234567", policy)


class TestApplyPriorityFilter:
    """Test tiered ranking."""

    def test_tier_ordering_and_limits(self):
        """5 tier-1, 5 tier-2 and 5 others give 4 + 2 + 0 with the defaults."""
        # Interleave so order preservation within each tier is visible
        candidates = banks(*[code for trio in zip(OTHERS, TIER2, TIER1) for code in trio])

        result = apply_priority_filter(candidates)

        assert [b.code for b in result] == TIER1[:4] + TIER2[:2]

    def test_minimum_backfill_from_others(self):
        """1 tier-1 and 4 others give 1 + 2 others in registry order."""
        candidates = banks("030", "063", "058", "102", "104")

        result = apply_priority_filter(candidates)

        assert [b.code for b in result] == ["058", "030", "063"]

    def test_backfill_bounded_by_available(self):
        result = apply_priority_filter(banks("565"))
        assert [b.code for b in result] == ["565"]

    def test_no_backfill_when_minimum_met(self):
        result = apply_priority_filter(banks("030", "058", "050", "011"))
        assert [b.code for b in result] == ["058", "011", "050"]

    def test_empty_candidates(self):
        assert apply_priority_filter([]) == []

    def test_maximum_truncation(self):
        policy = PrioritizationPolicy(max_tier1_results=10, maximum_suggestions=3)
        result = apply_priority_filter(banks(*TIER1), policy)
        assert [b.code for b in result] == TIER1[:3]

    def test_others_only_policy(self):
        policy = PrioritizationPolicy(
            max_tier1_results=0, max_tier2_results=0, minimum_suggestions=2
        )
        result = apply_priority_filter(banks("058", "030", "050", "063", "102"), policy)
        assert [b.code for b in result] == ["030", "063"]

    def test_tier1_wins_on_overlap(self):
        policy = PrioritizationPolicy(
            tier1_codes={"058"},
            tier2_codes={"058", "050"},
            max_tier1_results=1,
            max_tier2_results=1,
            minimum_suggestions=0,
        )
        result = apply_priority_filter(banks("050", "058"), policy)
        assert [b.code for b in result] == ["058", "050"]

    def test_case_insensitive_membership(self):
        policy = PrioritizationPolicy(tier1_codes={"abc"}, tier2_codes=set(), minimum_suggestions=0)
        result = apply_priority_filter(banks("ABC", "XYZ"), policy)
        assert [b.code for b in result] == ["ABC"]

    def test_idempotent_on_filtered_output(self):
        candidates = banks(*(OTHERS + TIER2 + TIER1))
        once = apply_priority_filter(candidates)
        assert apply_priority_filter(once) == once

        backfilled = apply_priority_filter(banks("030", "063", "058", "102"))
        assert apply_priority_filter(backfilled) == backfilled

    def test_input_not_mutated(self):
        candidates = banks(*TIER1)
        apply_priority_filter(candidates)
        assert [b.code for b in candidates] == TIER1
