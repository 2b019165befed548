"""Account ledger: cash, positions, transaction log and performance series.

The account is the single authority over cash and position mutation. It
guarantees two invariants on its own:

* cash never drops below ``-epsilon``: ``withdraw`` is the only way to take
  cash out and refuses amounts it cannot cover;
* no stored position has a quantity <= 0: ``adjust_position`` drops entries
  that reach zero, so a missing symbol means "not held".

The buy/sell rules that combine these primitives live in
``simulation.broker``.
"""

from __future__ import annotations

import datetime as dt
import logging

from models.config import AccountConfig
from models.order import Side, Transaction
from models.performance import Snapshot
from models.portfolio import PortfolioSnapshot, Position

logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-9


class Account:
    """Stateful single-user ledger.

    Read accessors return copies; the only way to change state is through
    the mutation methods below.
    """

    def __init__(self, initial_cash: float = 10_000.0, epsilon: float = DEFAULT_EPSILON) -> None:
        self._cash: float = initial_cash
        self._epsilon = epsilon
        self._positions: dict[str, int] = {}
        self._transactions: list[Transaction] = []
        self._performance: list[Snapshot] = []

    @classmethod
    def from_config(cls, config: AccountConfig) -> Account:
        return cls(initial_cash=config.initial_cash, epsilon=config.epsilon)

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @property
    def cash(self) -> float:
        return self._cash

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def positions(self) -> list[Position]:
        """Held positions in acquisition order."""
        return [Position(symbol=s, quantity=q) for s, q in self._positions.items()]

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def performance(self) -> list[Snapshot]:
        return list(self._performance)

    def position_of(self, symbol: str) -> int:
        """Return the quantity held of *symbol* (0 if none). Case-insensitive."""
        return self._positions.get(_normalize(symbol), 0)

    def get_portfolio(self) -> PortfolioSnapshot:
        """Return a detached copy of cash and positions."""
        return PortfolioSnapshot(cash=self._cash, positions=dict(self._positions))

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def adjust_position(self, symbol: str, delta_qty: int) -> int:
        """Add *delta_qty* to the position in *symbol* and return the new quantity.

        A result of zero or less removes the position entirely.
        """
        symbol = _normalize(symbol)
        quantity = self._positions.get(symbol, 0) + delta_qty
        if quantity <= 0:
            self._positions.pop(symbol, None)
            return 0
        self._positions[symbol] = quantity
        return quantity

    # ------------------------------------------------------------------
    # Cash
    # ------------------------------------------------------------------

    def deposit(self, amount: float) -> None:
        self._cash += amount

    def withdraw(self, amount: float) -> bool:
        """Take *amount* out of cash if the balance covers it.

        Returns ``False`` and leaves cash untouched otherwise.
        """
        if amount <= self._cash + self._epsilon:
            self._cash -= amount
            return True
        logger.debug("Withdrawal of %.2f refused; cash is %.2f.", amount, self._cash)
        return False

    def set_cash(self, amount: float) -> None:
        """Replace the balance. Used when restoring persisted state."""
        self._cash = amount

    # ------------------------------------------------------------------
    # Logs (append-only)
    # ------------------------------------------------------------------

    def record_transaction(
        self,
        date: dt.date,
        symbol: str,
        side: Side,
        quantity: int,
        price: float,
    ) -> Transaction:
        """Append a transaction. Cash and positions are not touched."""
        transaction = Transaction(
            date=date, symbol=symbol, side=side, quantity=quantity, price=price
        )
        self._transactions.append(transaction)
        return transaction

    def append_snapshot(self, snapshot: Snapshot) -> None:
        self._performance.append(snapshot)


def _normalize(symbol: str) -> str:
    return symbol.strip().upper()
