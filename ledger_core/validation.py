"""
Validation Engine

Stateless checks for accounts and transactions. Each rule set fails fast on
the first violated rule, in the order the functions below are called, and
none of them mutate the object they inspect.

Account rules:
    1. account number is a positive integer string       -> InvalidArgument
    2. balance is present and not negative                 -> InvalidArgument

Transaction rules:
    1. amount is present and strictly positive             -> InvalidArgument
    2. description is present                              -> InvalidArgument
    3. timestamp is present and not older than tolerance   -> InvalidState
    4. (debits only) balance covers the amount             -> InvalidState
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional
import re

from .config import get_config
from .errors import InvalidArgument, InvalidState
from .money import ZERO

if TYPE_CHECKING:
    from .accounts import Account
    from .transactions import Transaction


_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')

# Account numbers must fit a signed 64-bit integer
MAX_ACCOUNT_NUMBER = 2 ** 63 - 1


# Account rules

def validate_account_number(account_number: Any) -> None:
    """Account numbers are strings holding a positive integer"""
    if not isinstance(account_number, str) or not account_number.strip():
        raise InvalidArgument("Account number cannot be empty")

    if account_number != account_number.strip():
        raise InvalidArgument(f"Account number cannot have surrounding whitespace, got '{account_number}'")

    if not _INTEGER_PATTERN.fullmatch(account_number):
        raise InvalidArgument(f"Account number must be an integer, got '{account_number}'")

    value = int(account_number)
    if value <= 0:
        raise InvalidArgument(f"Account number must be positive, got '{account_number}'")

    if value > MAX_ACCOUNT_NUMBER:
        raise InvalidArgument(f"Account number is out of range, got '{account_number}'")


def validate_account_balance(balance: Optional[Decimal]) -> None:
    if balance is None:
        raise InvalidArgument("Account balance cannot be null")

    if balance < ZERO:
        raise InvalidArgument("Account balance cannot be negative")


def validate_account(account: 'Account') -> None:
    """Run the account rules against a candidate account"""
    validate_account_number(account.account_number)
    validate_account_balance(account.balance)


# Transaction rules

def validate_amount(amount: Optional[Decimal]) -> None:
    if amount is None:
        raise InvalidArgument("Transaction amount cannot be null")

    if amount == ZERO:
        raise InvalidArgument("Transaction amount cannot be zero")

    if amount < ZERO:
        raise InvalidArgument("Transaction amount cannot be negative")


def validate_description(description: Any) -> None:
    if description is None:
        raise InvalidArgument("Transaction description cannot be null")

    if not isinstance(description, str):
        raise InvalidArgument("Transaction description must be text")


def validate_timestamp(
    timestamp: Optional[datetime],
    now: Optional[datetime] = None,
    tolerance_seconds: Optional[float] = None
) -> None:
    """
    Reject missing timestamps and timestamps older than the tolerance.

    Timestamps in the future are accepted. Naive timestamps are compared with
    naive local time, aware ones with the current UTC time, unless ``now`` is
    supplied explicitly.
    """
    if timestamp is None:
        raise InvalidState("Transaction timestamp cannot be null")

    if not isinstance(timestamp, datetime):
        raise InvalidArgument(f"Transaction timestamp must be a datetime, got {type(timestamp).__name__}")

    if tolerance_seconds is None:
        tolerance_seconds = get_config().timestamp_tolerance_seconds

    if now is None:
        now = datetime.now() if timestamp.tzinfo is None else datetime.now(timezone.utc)
    elif (now.tzinfo is None) != (timestamp.tzinfo is None):
        raise InvalidArgument("Cannot compare naive and timezone-aware timestamps")

    if timestamp < now - timedelta(seconds=tolerance_seconds):
        raise InvalidState(f"Transaction timestamp {timestamp.isoformat()} is in the past")


def self_validate_transaction(transaction: 'Transaction', now: Optional[datetime] = None) -> None:
    """Structural checks that need nothing beyond the transaction itself"""
    validate_amount(transaction.amount)
    validate_description(transaction.description)
    validate_timestamp(transaction.timestamp, now=now)


def validate_transaction(
    transaction: 'Transaction',
    account: 'Account',
    now: Optional[datetime] = None
) -> None:
    """
    Full validation before a transaction touches an account.

    Debit kinds must also be covered by the account's current balance.
    """
    self_validate_transaction(transaction, now=now)

    if transaction.kind.is_debit and account.balance < transaction.amount:
        raise InvalidState(
            f"Insufficient balance in account {account.account_number}: "
            f"balance={account.balance}, amount={transaction.amount}"
        )
