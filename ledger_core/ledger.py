"""
Transaction Ledger

Keeps an append-only history of transactions per account, in the order they
were applied. Recording trusts the caller to have validated the transaction;
existence of accounts is delegated to the AccountDirectory.
"""

from typing import Dict, List

from .accounts import AccountDirectory
from .transactions import Transaction


class TransactionLedger:
    """
    Per-account transaction histories
    """

    def __init__(self, directory: AccountDirectory):
        self.directory = directory
        self._histories: Dict[str, List[Transaction]] = {}

    def record(self, account_number: str, transaction: Transaction) -> None:
        """Append a transaction to an account's history"""
        self._histories.setdefault(account_number, []).append(transaction)

    def history_for(self, account_number: str) -> List[Transaction]:
        """
        Get an account's history, oldest first

        Returns a new list on every call; changing it does not affect the
        stored history.

        Raises:
            NotFound: If the account is unknown to the directory
        """
        self.directory.get_account(account_number)
        return list(self._histories.get(account_number, []))

    def has_history(self, account_number: str) -> bool:
        """Check if any transaction was recorded for an account"""
        return account_number in self._histories

    def all_transactions(self) -> List[Transaction]:
        """Get every recorded transaction, grouped by account"""
        return [
            transaction
            for history in self._histories.values()
            for transaction in history
        ]
