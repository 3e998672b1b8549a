"""
Bank API routes.

Provides endpoints to list the registry, validate an account number for a
bank, and suggest the banks that could have issued an account number.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from pydantic import BaseModel, Field
import logging

from nuban.banks.models import Bank
from nuban.banks.search import resolve_bank, search_banks
from nuban.prediction.checksum import is_valid_nuban_for_bank
from nuban.prediction.errors import InvalidInputError, InvalidInputReason
from nuban.prediction.selector import (
    BankSuggestionService,
    SuggestionMode,
    get_suggestion_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/banks", tags=["banks"])


class BankListResponse(BaseModel):
    """Response for bank listing and search."""

    total: int
    banks: List[Bank] = Field(default_factory=list)


class SuggestionResponse(BaseModel):
    """Response for bank suggestion."""

    account_number: str
    mode: SuggestionMode
    phone_number_format: bool
    total: int
    banks: List[Bank] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    """Response for a single account/bank check."""

    account_number: str
    bank_code: str
    bank_name: Optional[str] = None
    valid: bool


def _to_http_error(error: InvalidInputError) -> HTTPException:
    if error.reason == InvalidInputReason.REGISTRY_UNAVAILABLE:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"reason": error.reason.value, "message": error.message},
        )
    return HTTPException(
        status_code=422,
        detail={"reason": error.reason.value, "message": error.message},
    )


@router.get("", response_model=BankListResponse)
async def list_banks(
    q: Optional[str] = Query(default=None, description="Filter by name or code"),
    service: BankSuggestionService = Depends(get_suggestion_service),
):
    """List registry banks, optionally filtered by a search term."""
    try:
        banks = await service.get_banks()
    except InvalidInputError as e:
        raise _to_http_error(e)

    matches = search_banks(banks, q)
    return BankListResponse(total=len(matches), banks=matches)


@router.get("/validate", response_model=ValidationResponse)
async def validate_account(
    account_number: str = Query(..., description="10-digit NUBAN"),
    bank_code: Optional[str] = Query(default=None, description="3-digit DMB or 5-digit OFI code"),
    bank: Optional[str] = Query(default=None, description="Registry bank code or name"),
    service: BankSuggestionService = Depends(get_suggestion_service),
):
    """Check an account number against one bank, given by code or by name."""
    if bank_code:
        return ValidationResponse(
            account_number=account_number,
            bank_code=bank_code,
            valid=is_valid_nuban_for_bank(account_number, bank_code),
        )

    if not bank:
        raise HTTPException(
            status_code=422,
            detail={"reason": "missing_bank", "message": "Provide bank_code or bank."},
        )

    try:
        banks = await service.get_banks()
    except InvalidInputError as e:
        raise _to_http_error(e)

    match = resolve_bank(banks, bank)
    if match is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"reason": "unknown_bank", "message": f"No bank matches '{bank}'."},
        )

    return ValidationResponse(
        account_number=account_number,
        bank_code=match.code,
        bank_name=match.name,
        valid=is_valid_nuban_for_bank(account_number, match.code),
    )


@router.get("/suggest/{account_number}", response_model=SuggestionResponse)
async def suggest_banks(
    account_number: str,
    service: BankSuggestionService = Depends(get_suggestion_service),
):
    """Suggest the banks that could have issued an account number."""
    try:
        suggestion = await service.suggest(account_number)
    except InvalidInputError as e:
        logger.info(f"Suggestion rejected for '{account_number}': {e.message}")
        raise _to_http_error(e)

    return SuggestionResponse(
        account_number=account_number,
        mode=suggestion.mode,
        phone_number_format=suggestion.mode == SuggestionMode.PHONE_NUMBER,
        total=len(suggestion.banks),
        banks=suggestion.banks,
    )
