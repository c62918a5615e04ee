"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

from ledgerkit.domain.errors import AmountMustBePositiveError, InvalidAmountError

CENTS = Decimal("0.01")
HALF_CENT = Decimal("0.005")

# Largest value a Numeric(10, 2) column can hold
MAX_AMOUNT = Decimal("99999999.99")

AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a positive Decimal with 2 fractional digits.

    Handles:
    - "123.45"
    - "10" -> 10.00
    - "10.155" -> 10.16 (ROUND_HALF_UP, extra digits are rounded not rejected)
    - "1e2" -> 100.00

    Currency symbols, thousands separators, NaN and Infinity are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount quantized to cents

    Raises:
        InvalidAmountError: If the string is empty, not a number, or too large
        AmountMustBePositiveError: If the rounded amount is not above zero,
            checked before the maximum
    """
    if amount_str is None or not str(amount_str).strip():
        raise InvalidAmountError("Amount is required")

    amount_str = str(amount_str).strip()
    if not AMOUNT_PATTERN.match(amount_str):
        raise InvalidAmountError(f"Invalid amount '{amount_str}'")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise InvalidAmountError(f"Could not parse amount '{amount_str}': {e}")

    if amount <= 0:
        raise AmountMustBePositiveError(f"Amount must be a positive number, got '{amount_str}'")
    # Compare before quantizing so huge exponents never reach the context limit
    if amount >= MAX_AMOUNT + HALF_CENT:
        raise InvalidAmountError(f"Amount '{amount_str}' exceeds maximum of {MAX_AMOUNT}")

    amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise AmountMustBePositiveError(f"Amount must be a positive number, got '{amount_str}'")
    return amount


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly 2 fractional digits."""
    return f"{amount.quantize(CENTS, rounding=ROUND_HALF_UP):.2f}"
