"""
Account Management Module

Accounts hold a non-negative Decimal balance that changes only by applying
transactions. The AccountDirectory is the only place accounts are created and
guarantees that account numbers are unique.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Iterator

from .errors import InvalidArgument, NotFound, DuplicateEntity
from .money import to_decimal
from .transactions import Transaction, TransactionKind
from .validation import validate_account, validate_account_balance, validate_transaction


@dataclass
class Account:
    """
    Ledger account

    Two accounts compare equal when both account number and balance match.
    """
    account_number: str
    balance: Decimal

    def __post_init__(self):
        self.balance = to_decimal(self.balance)
        validate_account(self)

    def apply_transaction(self, transaction: Transaction) -> None:
        """
        Apply a transaction's effect to the balance.

        Debits are fully validated against the current balance before anything
        changes, so a rejected debit leaves the account untouched.
        """
        if transaction.account_number != self.account_number:
            raise InvalidArgument(
                f"Transaction for account {transaction.account_number} "
                f"cannot be applied to account {self.account_number}"
            )

        kind = transaction.kind
        if kind == TransactionKind.DEPOSIT:
            new_balance = self.balance + transaction.amount
            validate_account_balance(new_balance)
            self.balance = new_balance
        elif kind in (TransactionKind.WITHDRAW, TransactionKind.TRANSFER):
            validate_transaction(transaction, self)
            self.balance = self.balance - transaction.amount
        else:
            raise InvalidArgument(f"Unsupported transaction kind: {kind!r}")


class AccountDirectory:
    """
    Owns every account in the ledger, keyed by account number
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}

    def create_account(self, account_number: str, initial_balance: Decimal) -> Account:
        """
        Create and register a new account

        Args:
            account_number: Positive integer as a string
            initial_balance: Opening balance, must not be negative

        Returns:
            Created Account object

        Raises:
            InvalidArgument: If the account number or balance is invalid
            DuplicateEntity: If the account number is already registered
        """
        account = Account(account_number=account_number, balance=initial_balance)

        if self.exists(account.account_number):
            raise DuplicateEntity(f"Account {account.account_number} already exists")

        self._accounts[account.account_number] = account
        return account

    def get_account(self, account_number: str) -> Account:
        """Get account by number"""
        account = self._accounts.get(account_number)
        if account is None:
            raise NotFound(f"Account {account_number} not found")
        return account

    def exists(self, account_number: str) -> bool:
        """Check if an account is registered"""
        return account_number in self._accounts

    def all_accounts(self) -> Dict[str, Account]:
        """Get a copy of the account mapping"""
        return dict(self._accounts)

    def __contains__(self, account_number: str) -> bool:
        return self.exists(account_number)

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(list(self._accounts.values()))
