"""
Transaction Records

A transaction is an immutable record of one ledger event. It validates itself
when constructed and never changes afterwards.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum

from .errors import InvalidArgument
from .money import to_decimal
from .validation import self_validate_transaction


class TransactionKind(Enum):
    """Kinds of ledger events"""
    DEPOSIT = "deposit"    # Credit
    WITHDRAW = "withdraw"  # Debit
    TRANSFER = "transfer"  # Debit on the source, paired with a DEPOSIT on the destination

    @property
    def is_debit(self) -> bool:
        """Check if this kind takes money out of the account"""
        return self in (TransactionKind.WITHDRAW, TransactionKind.TRANSFER)


@dataclass(frozen=True)
class Transaction:
    """
    One ledger event recorded against ``account_number``.

    ``counterparty_account`` is set only on the source leg of a transfer and
    names the destination account.
    """
    account_number: str
    amount: Decimal
    description: str
    kind: TransactionKind
    timestamp: datetime
    counterparty_account: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise InvalidArgument(f"Unknown transaction kind: {self.kind!r}")

        object.__setattr__(self, 'amount', to_decimal(self.amount))

        self_validate_transaction(self)

        if self.kind == TransactionKind.TRANSFER and not self.counterparty_account:
            raise InvalidArgument("Transfer transaction must name a counterparty account")

        if self.kind != TransactionKind.TRANSFER and self.counterparty_account is not None:
            raise InvalidArgument(f"{self.kind.name} transaction cannot have a counterparty account")

    @property
    def is_debit(self) -> bool:
        return self.kind.is_debit

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary"""
        return {
            'account_number': self.account_number,
            'amount': str(self.amount),
            'description': self.description,
            'kind': self.kind.value,
            'timestamp': self.timestamp.isoformat(),
            'counterparty_account': self.counterparty_account,
        }
