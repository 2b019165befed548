"""Mark-to-market valuation of an account against a market.

Pure functions: neither the account nor the market is modified. Positions in
symbols the market no longer lists are valued at zero.
"""

from __future__ import annotations

from simulation.account import Account
from simulation.market import Market


def position_values(account: Account, market: Market) -> dict[str, float]:
    """Return the current market value of each held position."""
    values: dict[str, float] = {}
    for position in account.positions:
        instrument = market.get(position.symbol)
        price = instrument.price if instrument is not None else 0.0
        values[position.symbol] = price * position.quantity
    return values


def market_value(account: Account, market: Market) -> float:
    """Sum of ``price * quantity`` over every held position."""
    return sum(position_values(account, market).values())


def total_value(account: Account, market: Market) -> float:
    """Cash plus the market value of all holdings."""
    return account.cash + market_value(account, market)
