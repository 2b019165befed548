"""In-process broker: buy/sell execution against the account ledger.

The broker validates and executes orders using all-or-nothing semantics.
Every precondition is checked before any mutation, so a rejected order
leaves cash, positions and the transaction log exactly as they were.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable

from models.order import Order, RejectionReason, TradeResult
from simulation.account import Account
from simulation.market import Market

logger = logging.getLogger(__name__)


class Broker:
    """Executes orders for one account at current market prices.

    There is no order book: every order fills completely at the
    instrument's current price, or is rejected with a descriptive message.
    """

    def __init__(
        self,
        account: Account,
        market: Market,
        clock: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._account = account
        self._market = market
        self._clock = clock

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def execute_order(self, order: Order) -> TradeResult:
        """Dispatch *order* to ``buy`` or ``sell``."""
        if order.side == "BUY":
            return self.buy(order.symbol, order.quantity)
        return self.sell(order.symbol, order.quantity)

    def buy(self, symbol: str, quantity: int) -> TradeResult:
        """Buy *quantity* shares of *symbol*, paying from cash."""
        instrument = self._market.get(symbol)
        if instrument is None:
            return self._reject("unknown_symbol", f"Unknown symbol: {symbol}.")

        if not _is_whole_quantity(quantity):
            return self._reject(
                "invalid_quantity",
                f"Order quantity must be a positive whole number, got {quantity} for {instrument.symbol}.",
            )

        price = instrument.price
        cost = price * quantity
        available = self._account.cash
        if not self._account.withdraw(cost):
            return self._reject(
                "insufficient_cash",
                f"Insufficient cash to buy {quantity} shares of {instrument.symbol} "
                f"at ${price:.2f} (cost ${cost:.2f}, available ${available:.2f}).",
            )

        self._account.adjust_position(instrument.symbol, quantity)
        transaction = self._account.record_transaction(
            self._clock(), instrument.symbol, "BUY", quantity, price
        )
        logger.info(
            "Bought %d %s @ $%.2f = $%.2f", quantity, instrument.symbol, price, transaction.amount
        )
        return TradeResult(
            status="accepted",
            transaction=transaction,
            message=f"Bought {quantity} {instrument.symbol} @ ${price:.2f}.",
        )

    def sell(self, symbol: str, quantity: int) -> TradeResult:
        """Sell *quantity* held shares of *symbol*, crediting cash."""
        instrument = self._market.get(symbol)
        if instrument is None:
            return self._reject("unknown_symbol", f"Unknown symbol: {symbol}.")

        held = self._account.position_of(instrument.symbol)
        if held <= 0:
            return self._reject("not_owned", f"You do not own {instrument.symbol}.")

        if not _is_whole_quantity(quantity) or quantity > held:
            return self._reject(
                "invalid_quantity",
                f"Cannot sell {quantity} shares of {instrument.symbol}: "
                f"quantity must be between 1 and {held}.",
            )

        price = instrument.price
        self._account.deposit(price * quantity)
        self._account.adjust_position(instrument.symbol, -quantity)
        transaction = self._account.record_transaction(
            self._clock(), instrument.symbol, "SELL", quantity, price
        )
        logger.info(
            "Sold %d %s @ $%.2f = $%.2f", quantity, instrument.symbol, price, transaction.amount
        )
        return TradeResult(
            status="accepted",
            transaction=transaction,
            message=f"Sold {quantity} {instrument.symbol} @ ${price:.2f}.",
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _reject(reason: RejectionReason, message: str) -> TradeResult:
        logger.info("Order rejected (%s): %s", reason, message)
        return TradeResult(status="rejected", reason=reason, message=message)


def _is_whole_quantity(quantity: object) -> bool:
    """Positive ``int`` only; floats and bools are rejected."""
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0
