"""Performance series models: Snapshot and PerformancePoint."""

import datetime as dt

from pydantic import BaseModel, ConfigDict


class Snapshot(BaseModel):
    """Total account value (cash + mark-to-market holdings) on a date.

    Several snapshots may share a date; the series is never deduplicated.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    total_value: float


class PerformancePoint(BaseModel):
    """One row of the performance report.

    ``pct_change`` is relative to the first snapshot of the series and is
    ``None`` when that baseline is zero.
    """

    date: dt.date
    total_value: float
    pct_change: float | None
