"""
Decimal Amount Handling

Converts caller-supplied amounts into Decimal. NEVER uses float arithmetic for
monetary values: floats are converted through their string form.
"""

from decimal import Decimal, InvalidOperation, getcontext
from typing import Any, Optional
import re

from .config import get_config
from .errors import InvalidArgument

# Set global decimal context for financial precision
getcontext().prec = get_config().amount_precision

ZERO = Decimal('0')

_THOUSANDS_PATTERN = re.compile(r'[+-]?\d{1,3}(,\d{3})+(\.\d+)?')


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        InvalidArgument: If string cannot be converted to a finite Decimal
    """
    if not value or not isinstance(value, str) or not value.strip():
        raise InvalidArgument("Amount must be a non-empty string")

    clean_value = value.strip()

    # Commas are only accepted as thousands separators: "1,234,567.89"
    if _THOUSANDS_PATTERN.fullmatch(clean_value):
        clean_value = clean_value.replace(',', '')

    try:
        result = Decimal(clean_value)
    except InvalidOperation:
        raise InvalidArgument(f"Cannot convert '{value}' to Decimal") from None

    if not result.is_finite():
        raise InvalidArgument(f"Amount must be a finite number, got '{value}'")

    return result


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Normalise an amount to Decimal.

    None passes through unchanged so the validation rules can report it as
    missing. Booleans are refused even though they are ints.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise InvalidArgument("Amount cannot be a boolean")

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgument(f"Amount must be a finite number, got {value}")
        return value

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        return decimal_from_string(str(value))

    if isinstance(value, str):
        return decimal_from_string(value)

    raise InvalidArgument(f"Unsupported amount type: {type(value).__name__}")
