"""
Test suite for transactions module

Tests transaction construction, self-validation at construction time,
immutability and serialisation.
"""

import dataclasses

import pytest
from decimal import Decimal
from datetime import datetime, timezone, timedelta

from ledger_core.errors import InvalidArgument, InvalidState
from ledger_core.transactions import Transaction, TransactionKind


class TestTransactionKind:
    """Test the closed set of transaction kinds"""

    def test_debit_kinds(self):
        """Test which kinds take money out of an account"""
        assert not TransactionKind.DEPOSIT.is_debit
        assert TransactionKind.WITHDRAW.is_debit
        assert TransactionKind.TRANSFER.is_debit

    def test_kind_values(self):
        """Test kinds round-trip through their values"""
        assert TransactionKind("deposit") is TransactionKind.DEPOSIT
        assert {kind.name for kind in TransactionKind} == {"DEPOSIT", "WITHDRAW", "TRANSFER"}


class TestTransaction:
    """Test Transaction class functionality"""

    def setup_method(self):
        """Set up test fixtures"""
        self.now = datetime.now(timezone.utc)

    def test_valid_deposit(self):
        """Test creating a valid deposit transaction"""
        transaction = Transaction(
            account_number="1001",
            amount=Decimal('50.00'),
            description="Paycheck",
            kind=TransactionKind.DEPOSIT,
            timestamp=self.now
        )

        assert transaction.account_number == "1001"
        assert transaction.amount == Decimal('50.00')
        assert transaction.description == "Paycheck"
        assert transaction.kind == TransactionKind.DEPOSIT
        assert transaction.timestamp == self.now
        assert transaction.counterparty_account is None
        assert not transaction.is_debit

    def test_valid_transfer(self):
        """Test the source leg of a transfer carries its counterparty"""
        transaction = Transaction(
            account_number="4001",
            amount=Decimal('30.00'),
            description="Rent share",
            kind=TransactionKind.TRANSFER,
            timestamp=self.now,
            counterparty_account="4002"
        )

        assert transaction.counterparty_account == "4002"
        assert transaction.is_debit

    def test_amount_coerced_to_decimal(self):
        """Test int, str and float amounts become Decimal"""
        for raw, expected in [(50, Decimal('50')), ("12.34", Decimal('12.34')), (0.1, Decimal('0.1'))]:
            transaction = Transaction("1001", raw, "Test", TransactionKind.DEPOSIT, self.now)
            assert isinstance(transaction.amount, Decimal)
            assert transaction.amount == expected

    @pytest.mark.parametrize("amount", [None, Decimal('0'), Decimal('-1'), 0, -50.0, "abc"])
    def test_invalid_amount(self, amount):
        """Test null, zero, negative and unparseable amounts are rejected"""
        with pytest.raises(InvalidArgument):
            Transaction("1001", amount, "Test", TransactionKind.DEPOSIT, self.now)

    def test_missing_description(self):
        """Test a null description is rejected"""
        with pytest.raises(InvalidArgument, match="description"):
            Transaction("1001", Decimal('10'), None, TransactionKind.DEPOSIT, self.now)

    def test_stale_timestamp(self):
        """Test a timestamp more than two seconds old is rejected"""
        with pytest.raises(InvalidState):
            Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT,
                        self.now - timedelta(seconds=5))

        with pytest.raises(InvalidState):
            Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT,
                        self.now - timedelta(days=1))

    def test_missing_timestamp(self):
        """Test a null timestamp is rejected"""
        with pytest.raises(InvalidState):
            Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT, None)

    def test_future_timestamp_accepted(self):
        """Test future timestamps are not bounded"""
        transaction = Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT,
                                  self.now + timedelta(days=1))
        assert transaction.timestamp > self.now

    def test_check_order(self):
        """Test amount is checked before description and timestamp"""
        with pytest.raises(InvalidArgument, match="amount"):
            Transaction("1001", Decimal('0'), None, TransactionKind.DEPOSIT, None)

        with pytest.raises(InvalidArgument, match="description"):
            Transaction("1001", Decimal('10'), None, TransactionKind.DEPOSIT, None)

    def test_unknown_kind(self):
        """Test kinds must be TransactionKind members, not strings"""
        with pytest.raises(InvalidArgument, match="Unknown transaction kind"):
            Transaction("1001", Decimal('10'), "Test", "DEPOSIT", self.now)

    def test_counterparty_consistency(self):
        """Test only transfers carry a counterparty, and transfers always do"""
        with pytest.raises(InvalidArgument, match="counterparty"):
            Transaction("1001", Decimal('10'), "Test", TransactionKind.TRANSFER, self.now)

        with pytest.raises(InvalidArgument, match="counterparty"):
            Transaction("1001", Decimal('10'), "Test", TransactionKind.WITHDRAW, self.now,
                        counterparty_account="1002")

    def test_immutable(self):
        """Test transactions cannot be changed after construction"""
        transaction = Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT, self.now)

        with pytest.raises(dataclasses.FrozenInstanceError):
            transaction.amount = Decimal('1000')

    def test_value_equality(self):
        """Test transactions with identical fields are equal"""
        first = Transaction("1001", Decimal('10'), "Test", TransactionKind.DEPOSIT, self.now)
        second = Transaction("1001", Decimal('10.00'), "Test", TransactionKind.DEPOSIT, self.now)
        other = Transaction("1001", Decimal('10'), "Other", TransactionKind.DEPOSIT, self.now)

        assert first == second
        assert first != other

    def test_to_dict(self):
        """Test serialisation to a plain dictionary"""
        transaction = Transaction("4001", Decimal('30.00'), "Rent share",
                                  TransactionKind.TRANSFER, self.now, counterparty_account="4002")

        assert transaction.to_dict() == {
            'account_number': "4001",
            'amount': "30.00",
            'description': "Rent share",
            'kind': "transfer",
            'timestamp': self.now.isoformat(),
            'counterparty_account': "4002",
        }
