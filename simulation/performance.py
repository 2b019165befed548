"""Performance series: value snapshots and change-since-start reporting."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence

from models.performance import PerformancePoint, Snapshot
from simulation.account import Account
from simulation.market import Market
from simulation.valuation import total_value

logger = logging.getLogger(__name__)

BASELINE_EPSILON = 1e-9


def record_snapshot(account: Account, market: Market, date: dt.date) -> Snapshot:
    """Append the account's current total value to its performance series.

    Repeated calls on the same date append repeated entries.
    """
    snapshot = Snapshot(date=date, total_value=total_value(account, market))
    account.append_snapshot(snapshot)
    logger.info("Snapshot %s: $%.2f", snapshot.date.isoformat(), snapshot.total_value)
    return snapshot


def performance_report(snapshots: Sequence[Snapshot]) -> list[PerformancePoint]:
    """Return each snapshot with its percentage change since the first one.

    If the first value is zero the change is undefined and every
    ``pct_change`` is ``None``.
    """
    if not snapshots:
        return []

    baseline = snapshots[0].total_value
    degenerate = abs(baseline) <= BASELINE_EPSILON
    if degenerate:
        logger.warning(
            "Performance baseline on %s is zero; percentage change is not computable.",
            snapshots[0].date.isoformat(),
        )

    return [
        PerformancePoint(
            date=s.date,
            total_value=s.total_value,
            pct_change=None if degenerate else (s.total_value - baseline) / baseline * 100.0,
        )
        for s in snapshots
    ]
