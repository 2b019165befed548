"""Plain-text views of the market, portfolio, performance and transactions."""

from __future__ import annotations

from collections.abc import Sequence

from models.order import TradeResult, Transaction
from models.performance import Snapshot
from simulation.account import Account
from simulation.market import Market
from simulation.performance import performance_report
from simulation.valuation import total_value


def format_market(market: Market) -> str:
    lines = ["--- MARKET DATA ---", f"{'SYM':<6} {'NAME':<18} {'PRICE':>10}"]
    for instrument in market.instruments():
        lines.append(f"{instrument.symbol:<6} {instrument.name:<18} ${instrument.price:>10.2f}")
    return "\n".join(lines)


def format_portfolio(account: Account, market: Market) -> str:
    """Cash, each position at its current price, and the total value.

    Positions whose symbol is no longer listed are shown at a price of 0.
    """
    lines = ["--- PORTFOLIO ---", f"Cash: ${account.cash:.2f}"]
    positions = account.positions
    if not positions:
        lines.append("(no positions)")
    else:
        lines.append(f"{'SYM':<6} {'QTY':>10} {'PRICE':>12} {'MKT VALUE':>14}")
        for position in positions:
            instrument = market.get(position.symbol)
            price = instrument.price if instrument is not None else 0.0
            lines.append(
                f"{position.symbol:<6} {position.quantity:>10d} {price:>12.2f} "
                f"{price * position.quantity:>14.2f}"
            )
    lines.append(f"Total Account Value: ${total_value(account, market):.2f}")
    return "\n".join(lines)


def format_performance(snapshots: Sequence[Snapshot]) -> str:
    lines = ["--- PERFORMANCE HISTORY ---"]
    if not snapshots:
        lines.append("(no snapshots yet - advance the market or record a snapshot)")
        return "\n".join(lines)

    for point in performance_report(snapshots):
        change = "n/a" if point.pct_change is None else f"{point.pct_change:+.2f}%"
        lines.append(
            f"{point.date.isoformat()}  ${point.total_value:.2f}  ({change} since start)"
        )
    return "\n".join(lines)


def format_transaction(transaction: Transaction) -> str:
    return (
        f"{transaction.date.isoformat()} {transaction.side} {transaction.symbol} "
        f"x{transaction.quantity} @ ${transaction.price:.2f}"
    )


def format_transactions(transactions: Sequence[Transaction]) -> str:
    lines = ["--- TRANSACTIONS ---"]
    if not transactions:
        lines.append("(none)")
    lines.extend(format_transaction(t) for t in transactions)
    return "\n".join(lines)


def format_trade(result: TradeResult) -> str:
    """One-line outcome of a buy or sell."""
    if not result.accepted or result.transaction is None:
        return result.message
    t = result.transaction
    verb = "Bought" if t.side == "BUY" else "Sold"
    return (
        f"{verb}: {t.date.isoformat()} {t.side} {t.symbol} {t.quantity} "
        f"@ ${t.price:.2f} = ${t.amount:.2f}"
    )
