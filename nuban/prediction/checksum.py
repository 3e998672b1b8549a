"""NUBAN check-digit validation.

A NUBAN account number is a 9-digit serial followed by one check digit. The
check digit is computed over the 6-digit form of the bank code followed by
the serial:

- 3-digit deposit money bank codes are left-padded with zeros ("058" -> "000058")
- 5-digit other financial institution codes are prefixed with 9 ("50211" -> "950211")

The 15 digits are weighted with 3,7,3,3,7,3,... and the check digit is
``(10 - sum % 10) % 10``.

Everything here is pure and never raises for malformed input.
"""

from __future__ import annotations

from nuban.core.digits import is_ascii_digits, strip_separators

NUBAN_LENGTH = 10
SERIAL_LENGTH = 9
DMB_CODE_LENGTH = 3
OFI_CODE_LENGTH = 5

MULTIPLIERS = (3, 7, 3, 3, 7, 3, 3, 7, 3, 3, 7, 3, 3, 7, 3)


def is_nuban_shaped(account_number: str) -> bool:
    """True for exactly ten ASCII digits."""
    return len(account_number) == NUBAN_LENGTH and is_ascii_digits(account_number)


def to_six_digit_bank_code(bank_code: str | None) -> str | None:
    """
    Map a bank code onto the 6-digit field used by the check-digit formula.

    Args:
        bank_code: 3-digit DMB or 5-digit OFI code

    Returns:
        6-digit code, or None if the code is neither
    """
    if not bank_code:
        return None
    bank_code = strip_separators(bank_code)
    if not is_ascii_digits(bank_code):
        return None
    if len(bank_code) == DMB_CODE_LENGTH:
        return bank_code.rjust(6, "0")
    if len(bank_code) == OFI_CODE_LENGTH:
        return "9" + bank_code
    return None


def calculate_check_digit(six_digit_bank_code: str, serial_number: str) -> int | None:
    """
    Calculate the NUBAN check digit.

    Args:
        six_digit_bank_code: Bank code already in 6-digit form
        serial_number: 9-digit account serial

    Returns:
        Check digit 0-9, or None if the combined value is not 15 digits
    """
    combined = six_digit_bank_code + serial_number
    if len(combined) != len(MULTIPLIERS) or not is_ascii_digits(combined):
        return None

    total = sum(int(digit) * weight for digit, weight in zip(combined, MULTIPLIERS))
    return (10 - total % 10) % 10


def is_valid_nuban_for_bank(account_number: str | None, bank_code: str | None) -> bool:
    """
    Check whether an account number is valid for a bank under NUBAN.

    Args:
        account_number: 10-digit account number; spaces and hyphens are ignored
        bank_code: 3-digit DMB or 5-digit OFI code

    Returns:
        True if the account's check digit matches the one computed for the bank
    """
    if not account_number or not bank_code:
        return False

    account_number = strip_separators(account_number)
    if not is_nuban_shaped(account_number):
        return False

    six_digit_bank_code = to_six_digit_bank_code(bank_code)
    if six_digit_bank_code is None:
        return False

    expected = calculate_check_digit(six_digit_bank_code, account_number[:SERIAL_LENGTH])
    if expected is None:
        return False

    return int(account_number[SERIAL_LENGTH]) == expected


def generate_nuban(bank_code: str, serial_number: str) -> str:
    """
    Build a full NUBAN from a bank code and a 9-digit serial.

    Raises:
        ValueError: If the bank code or serial is malformed
    """
    six_digit_bank_code = to_six_digit_bank_code(bank_code)
    if six_digit_bank_code is None:
        raise ValueError(f"Bank code must be 3 or 5 digits, got {bank_code!r}")

    serial_number = strip_separators(serial_number)
    if len(serial_number) != SERIAL_LENGTH or not is_ascii_digits(serial_number):
        raise ValueError(f"Serial number must be 9 digits, got {serial_number!r}")

    check_digit = calculate_check_digit(six_digit_bank_code, serial_number)
    if check_digit is None:
        raise ValueError(f"Cannot compute check digit for {bank_code!r}/{serial_number!r}")
    return f"{serial_number}{check_digit}"
