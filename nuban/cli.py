"""
NUBAN command-line interface.

Suggest issuing banks, check an account against a bank, list the registry,
or build a NUBAN from a bank code and serial.
"""

import asyncio
import sys
from typing import List, Optional

import structlog

from nuban.banks.models import Bank
from nuban.banks.search import resolve_bank, search_banks
from nuban.prediction.checksum import (
    generate_nuban,
    is_valid_nuban_for_bank,
    to_six_digit_bank_code,
)
from nuban.prediction.errors import InvalidInputError
from nuban.prediction.selector import SuggestionMode, get_suggestion_service

logger = structlog.get_logger()


def print_banks(banks: List[Bank]):
    """Pretty print a list of banks."""
    if not banks:
        print("No banks found.")
        return
    width = max(len(bank.code) for bank in banks)
    for bank in banks:
        print(f"  {bank.code.ljust(width)}  {bank.name}")


async def suggest_command(account_number: str) -> int:
    """Suggest banks for an account number."""
    try:
        suggestion = await get_suggestion_service().suggest(account_number)
    except InvalidInputError as e:
        print(f"Error: {e.message}")
        return 1

    print(f"\n=== Possible banks for {account_number} ===\n")
    if suggestion.mode == SuggestionMode.PHONE_NUMBER:
        print("(phone number format)\n")
    print_banks(suggestion.banks)
    print()
    return 0


async def validate_command(account_number: str, bank: str) -> int:
    """Check an account number against one bank, given by code or name."""
    if to_six_digit_bank_code(bank) is not None:
        code, label = bank, f"bank code {bank}"
    else:
        try:
            banks = await get_suggestion_service().get_banks()
        except InvalidInputError as e:
            print(f"Error: {e.message}")
            return 1
        match = resolve_bank(banks, bank)
        if match is None:
            print(f"Error: No bank matches '{bank}'")
            return 1
        code, label = match.code, f"{match.name} ({match.code})"

    valid = is_valid_nuban_for_bank(account_number, code)
    print(f"{account_number} is {'VALID' if valid else 'NOT valid'} for {label}")
    return 0 if valid else 1


async def banks_command(term: Optional[str] = None) -> int:
    """List registry banks."""
    try:
        banks = await get_suggestion_service().get_banks()
    except InvalidInputError as e:
        print(f"Error: {e.message}")
        return 1

    matches = search_banks(banks, term)
    print(f"\n=== Banks ({len(matches)}) ===\n")
    print_banks(matches)
    print()
    return 0


def generate_command(bank_code: str, serial_number: str) -> int:
    """Build a NUBAN from a bank code and 9-digit serial."""
    try:
        print(generate_nuban(bank_code, serial_number))
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    return 0


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print("Usage: python -m nuban.cli <command> [options]")
        print("\nCommands:")
        print("  suggest <account>           Suggest banks for an account number")
        print("  validate <account> <bank>   Check an account for one bank code or name")
        print("  banks [term]                List banks, optionally filtered")
        print("  generate <code> <serial>    Build a NUBAN from a 9-digit serial")
        print("\nExamples:")
        print("  python -m nuban.cli suggest 0123456789")
        print("  python -m nuban.cli validate 0123456789 058")
        print("  python -m nuban.cli validate 0123456789 \"gt bank\"")
        print("  python -m nuban.cli banks zenith")
        print("  python -m nuban.cli generate 058 123456789")
        return 1

    command = sys.argv[1]
    args = sys.argv[2:]

    try:
        if command == "suggest" and len(args) == 1:
            return asyncio.run(suggest_command(args[0]))
        elif command == "validate" and len(args) == 2:
            return asyncio.run(validate_command(args[0], args[1]))
        elif command == "banks" and len(args) <= 1:
            return asyncio.run(banks_command(args[0] if args else None))
        elif command == "generate" and len(args) == 2:
            return generate_command(args[0], args[1])
        else:
            print(f"Unknown command or wrong arguments: {' '.join(sys.argv[1:])}")
            return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        print(f"Error: {str(e)}")
        logger.exception("cli_error", command=command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
