"""Lookup helpers over a loaded bank registry."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from rapidfuzz import fuzz, process, utils

from nuban.banks.models import Bank

logger = logging.getLogger(__name__)


def search_banks(banks: Iterable[Bank], term: str | None) -> List[Bank]:
    """
    Case-insensitive substring search on bank name or code.

    Args:
        banks: Registry to search
        term: Search term; blank returns every bank

    Returns:
        Matching banks in registry order
    """
    if term is None or not term.strip():
        return list(banks)

    needle = term.strip().casefold()
    return [
        bank
        for bank in banks
        if needle in bank.name.casefold() or needle in bank.code.casefold()
    ]


def find_bank_by_code(banks: Iterable[Bank], code: str) -> Optional[Bank]:
    """Return the first bank whose code matches, ignoring case and surrounding spaces."""
    wanted = code.strip().casefold()
    for bank in banks:
        if bank.code.casefold() == wanted:
            return bank
    return None


def find_bank_by_name(
    banks: Iterable[Bank], name: str | None, min_score: float = 80.0
) -> Optional[Bank]:
    """
    Fuzzy match a free-text bank name against the registry.

    Useful for names typed by users ("gt bank", "Moniepoint MFB").

    Args:
        banks: Registry to search
        name: Free-text bank name
        min_score: Minimum rapidfuzz WRatio score (0-100)

    Returns:
        Best matching bank or None if nothing scores high enough
    """
    if not name or not name.strip():
        return None

    candidates = list(banks)
    if not candidates:
        return None

    match = process.extractOne(
        name,
        [bank.name for bank in candidates],
        scorer=fuzz.WRatio,
        processor=utils.default_process,
        score_cutoff=min_score,
    )
    if match is None:
        logger.debug(f"No bank name match for '{name}' (cutoff {min_score})")
        return None

    _, score, index = match
    logger.debug(f"Matched '{name}' to '{candidates[index].name}' (score {score:.1f})")
    return candidates[index]


def resolve_bank(banks: Iterable[Bank], query: str | None) -> Optional[Bank]:
    """
    Resolve a user-supplied bank reference, trying the code first.

    Args:
        banks: Registry to search
        query: Bank code ("058") or free-text name ("gt bank")

    Returns:
        Matching bank or None
    """
    if not query or not query.strip():
        return None

    candidates = list(banks)
    return find_bank_by_code(candidates, query) or find_bank_by_name(candidates, query)
