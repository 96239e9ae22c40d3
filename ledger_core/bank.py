"""
Ledger Service

Orchestrates deposits, withdrawals and transfers: resolves accounts, builds
the transaction records, applies them to the accounts and records them in
the transaction ledger. Every operation either completes or raises without
leaving partial effects behind.
"""

from decimal import Decimal
from datetime import datetime
from typing import List, Optional, Tuple

from .accounts import Account, AccountDirectory
from .config import get_config
from .errors import LedgerError, InvalidArgument
from .ledger import TransactionLedger
from .logging_config import get_logger, log_action
from .transactions import Transaction, TransactionKind


class Bank:
    """
    Entry point for callers of the ledger
    """

    def __init__(
        self,
        directory: Optional[AccountDirectory] = None,
        ledger: Optional[TransactionLedger] = None
    ):
        if directory is None:
            directory = ledger.directory if ledger is not None else AccountDirectory()
        if ledger is None:
            ledger = TransactionLedger(directory)
        if ledger.directory is not directory:
            raise InvalidArgument("Transaction ledger must share the bank's account directory")

        self.directory = directory
        self.ledger = ledger
        self.logger = get_logger("ledger_core.bank")

    def create_account(self, account_number: str, initial_balance: Decimal) -> Account:
        """Open an account with a non-negative opening balance"""
        try:
            account = self.directory.create_account(account_number, initial_balance)
        except LedgerError as e:
            self._log_rejected("create_account", account_number, e)
            raise

        self._log_applied(
            "create_account", account.account_number, "Account created",
            {"balance": str(account.balance)}
        )
        return account

    def get_account(self, account_number: str) -> Account:
        return self.directory.get_account(account_number)

    def get_transaction_history(self, account_number: str) -> List[Transaction]:
        return self.ledger.history_for(account_number)

    def deposit(
        self,
        account_number: str,
        amount: Decimal,
        description: str,
        timestamp: datetime
    ) -> Transaction:
        """
        Credit an account

        Raises:
            NotFound: If the account does not exist
            InvalidArgument: If amount or description is invalid
            InvalidState: If the timestamp is missing or stale
        """
        return self._post(TransactionKind.DEPOSIT, account_number, amount, description, timestamp)

    def withdraw(
        self,
        account_number: str,
        amount: Decimal,
        description: str,
        timestamp: datetime
    ) -> Transaction:
        """
        Debit an account

        Raises:
            NotFound: If the account does not exist
            InvalidArgument: If amount or description is invalid
            InvalidState: If the timestamp is stale or the balance is insufficient
        """
        return self._post(TransactionKind.WITHDRAW, account_number, amount, description, timestamp)

    def transfer(
        self,
        from_account: str,
        to_account: str,
        amount: Decimal,
        description: str,
        timestamp: datetime
    ) -> Tuple[Transaction, Transaction]:
        """
        Move funds between two accounts

        The source is debited before the destination is touched. If the debit
        is rejected, neither account nor either history changes.

        Returns:
            The TRANSFER record of the source and the DEPOSIT record of the destination
        """
        resource = f"{from_account}->{to_account}"
        try:
            source = self.directory.get_account(from_account)
            destination = self.directory.get_account(to_account)

            if source is destination:
                raise InvalidArgument(f"Cannot transfer from account {from_account} to itself")

            debit = Transaction(
                account_number=from_account,
                amount=amount,
                description=description,
                kind=TransactionKind.TRANSFER,
                timestamp=timestamp,
                counterparty_account=to_account
            )
            credit = Transaction(
                account_number=to_account,
                amount=amount,
                description=description,
                kind=TransactionKind.DEPOSIT,
                timestamp=timestamp
            )

            source.apply_transaction(debit)
            destination.apply_transaction(credit)
        except LedgerError as e:
            self._log_rejected("transfer", resource, e)
            raise

        self.ledger.record(from_account, debit)
        self.ledger.record(to_account, credit)

        self._log_applied(
            "transfer", resource, "Transfer applied",
            {"amount": str(debit.amount), "from_account": from_account, "to_account": to_account}
        )
        return debit, credit

    def _post(
        self,
        kind: TransactionKind,
        account_number: str,
        amount: Decimal,
        description: str,
        timestamp: datetime
    ) -> Transaction:
        """Apply a single-account transaction and record it"""
        action = kind.value
        try:
            account = self.directory.get_account(account_number)
            transaction = Transaction(
                account_number=account_number,
                amount=amount,
                description=description,
                kind=kind,
                timestamp=timestamp
            )
            account.apply_transaction(transaction)
        except LedgerError as e:
            self._log_rejected(action, account_number, e)
            raise

        self.ledger.record(account_number, transaction)

        self._log_applied(
            action, account_number, f"{kind.name.capitalize()} applied",
            {"amount": str(transaction.amount), "balance": str(account.balance)}
        )
        return transaction

    def _log_applied(self, action: str, resource: str, message: str, extra: dict) -> None:
        if get_config().enable_operation_logging:
            log_action(
                self.logger, "info", message,
                action=action, resource=f"account:{resource}", extra=extra
            )

    def _log_rejected(self, action: str, resource: str, error: LedgerError) -> None:
        if get_config().enable_operation_logging:
            log_action(
                self.logger, "warning", f"{action} rejected: {error}",
                action=action, resource=f"account:{resource}",
                extra={"error": type(error).__name__}
            )
