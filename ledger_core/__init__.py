"""
In-Memory Ledger Core

An embeddable accounting core that tracks accounts, applies deposits,
withdrawals and transfers under validation rules, and keeps an ordered
transaction history per account. All amounts use Decimal.
"""

from .errors import LedgerError, InvalidArgument, InvalidState, NotFound, DuplicateEntity
from .transactions import Transaction, TransactionKind
from .accounts import Account, AccountDirectory
from .ledger import TransactionLedger
from .bank import Bank

__version__ = "1.0.0"

__all__ = [
    "LedgerError",
    "InvalidArgument",
    "InvalidState",
    "NotFound",
    "DuplicateEntity",
    "Transaction",
    "TransactionKind",
    "Account",
    "AccountDirectory",
    "TransactionLedger",
    "Bank",
]
