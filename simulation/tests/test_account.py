"""
Tests for simulation/account.py (the ledger primitives).

Coverage:
  1. adjust_position: sparse map, removal at <= 0
  2. deposit / withdraw solvency gate with epsilon tolerance
  3. record_transaction is log-only
  4. Read views are detached copies
"""

import datetime as dt
import random

import pytest

from models.config import AccountConfig
from models.performance import Snapshot
from simulation.account import Account

D1 = dt.date(2025, 3, 14)


@pytest.fixture
def account() -> Account:
    return Account(initial_cash=10_000.0)


class TestPositions:

    def test_missing_symbol_reads_as_zero(self, account):
        assert account.position_of("AAPL") == 0
        assert account.positions == []

    def test_adjust_creates_and_accumulates(self, account):
        assert account.adjust_position("AAPL", 10) == 10
        assert account.adjust_position("AAPL", 5) == 15
        assert account.position_of("AAPL") == 15

    def test_position_removed_at_zero(self, account):
        account.adjust_position("AAPL", 10)
        account.adjust_position("AAPL", -10)
        assert account.position_of("AAPL") == 0
        assert "AAPL" not in account.get_portfolio().positions

    def test_position_removed_below_zero(self, account):
        account.adjust_position("AAPL", 3)
        assert account.adjust_position("AAPL", -7) == 0
        assert account.positions == []

    def test_negative_delta_on_missing_symbol_stores_nothing(self, account):
        account.adjust_position("AAPL", -4)
        assert account.get_portfolio().positions == {}

    def test_random_adjustments_never_store_non_positive(self, account):
        rng = random.Random(7)
        for _ in range(1000):
            account.adjust_position(rng.choice(["A", "B", "C"]), rng.randint(-5, 5))
            assert all(qty > 0 for qty in account.get_portfolio().positions.values())

    def test_symbols_are_case_insensitive(self, account):
        account.adjust_position("aapl", 4)
        account.adjust_position(" AAPL ", 1)
        assert account.position_of("aapl") == 5
        assert account.get_portfolio().positions == {"AAPL": 5}

    def test_positions_keep_acquisition_order(self, account):
        account.adjust_position("MSFT", 1)
        account.adjust_position("AAPL", 2)
        assert [(p.symbol, p.quantity) for p in account.positions] == [("MSFT", 1), ("AAPL", 2)]


class TestCash:

    def test_deposit_increases_cash(self, account):
        account.deposit(250.5)
        assert account.cash == pytest.approx(10_250.5)

    def test_withdraw_within_balance(self, account):
        assert account.withdraw(1_900.0) is True
        assert account.cash == pytest.approx(8_100.0)

    def test_withdraw_entire_balance(self, account):
        assert account.withdraw(10_000.0) is True
        assert account.cash == 0.0

    def test_withdraw_within_epsilon(self):
        acct = Account(initial_cash=100.0)
        assert acct.withdraw(100.0 + 5e-10) is True
        assert acct.cash >= -acct.epsilon

    def test_withdraw_beyond_balance_fails_without_change(self, account):
        assert account.withdraw(10_000.01) is False
        assert account.cash == 10_000.0

    def test_set_cash_replaces_balance(self, account):
        account.set_cash(42.0)
        assert account.cash == 42.0

    def test_from_config(self):
        acct = Account.from_config(AccountConfig(initial_cash=500.0, epsilon=0.5))
        assert acct.cash == 500.0
        assert acct.withdraw(500.4) is True


class TestLogs:

    def test_record_transaction_is_log_only(self, account):
        t = account.record_transaction(D1, "AAPL", "BUY", 10, 190.0)
        assert t.amount == pytest.approx(1_900.0)
        assert account.transactions == [t]
        assert account.cash == 10_000.0
        assert account.position_of("AAPL") == 0

    def test_transactions_append_in_order(self, account):
        account.record_transaction(D1, "AAPL", "BUY", 1, 1.0)
        account.record_transaction(D1, "AAPL", "SELL", 1, 2.0)
        assert [t.side for t in account.transactions] == ["BUY", "SELL"]

    def test_snapshots_append_without_dedup(self, account):
        snap = Snapshot(date=D1, total_value=1.0)
        account.append_snapshot(snap)
        account.append_snapshot(snap)
        assert len(account.performance) == 2


class TestReadViews:

    def test_views_are_copies(self, account):
        account.adjust_position("AAPL", 1)
        account.record_transaction(D1, "AAPL", "BUY", 1, 1.0)
        account.transactions.clear()
        account.performance.append(Snapshot(date=D1, total_value=0.0))
        portfolio = account.get_portfolio()
        portfolio.positions["AAPL"] = 99
        assert len(account.transactions) == 1
        assert account.performance == []
        assert account.position_of("AAPL") == 1
