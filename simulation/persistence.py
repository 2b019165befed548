"""Flat-file persistence for the account: cash, holdings and history.

The data directory layout is::

    {data_dir}/
    ├── cash.txt        # a single number
    ├── holdings.csv    # symbol,quantity
    └── history.csv     # date,total_value  (ISO dates, series order)

Loading is tolerant: a malformed row is skipped and counted, an unreadable
file is logged and skipped, and neither aborts the rest of the load. Saving
writes each file independently for the same reason.

Holdings are restored through ``Account.adjust_position`` without matching
transactions, so a freshly loaded account does not reconcile its positions
against its (empty) transaction log.
"""

from __future__ import annotations

import csv
import datetime as dt
import logging
import math
from pathlib import Path

from models.performance import Snapshot
from models.persistence import LoadReport, StoreLoadStats
from simulation.account import Account

logger = logging.getLogger(__name__)

CASH_FILE = "cash.txt"
HOLDINGS_FILE = "holdings.csv"
HISTORY_FILE = "history.csv"

HOLDINGS_HEADER = ["symbol", "quantity"]
HISTORY_HEADER = ["date", "total_value"]


class PortfolioStore:
    """Loads and saves one account's state under *data_dir*."""

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def exists(self) -> bool:
        """Return whether any persisted store is present."""
        return any(
            (self._data_dir / name).exists()
            for name in (CASH_FILE, HOLDINGS_FILE, HISTORY_FILE)
        )

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self, account: Account) -> LoadReport:
        """Apply persisted state to a freshly constructed *account*.

        Must be called once per account: holdings are added to whatever the
        account already holds, and history rows are appended.
        """
        if account.positions or account.performance:
            logger.warning("Loading persisted state into a non-empty account.")

        report = LoadReport()
        self._load_cash(account, report)
        self._load_holdings(account, report)
        self._load_history(account, report)

        logger.info(
            "Loaded state from %s: cash=%s, %d holding(s), %d snapshot(s), %d row(s) skipped.",
            self._data_dir,
            "yes" if report.cash_loaded else "default",
            report.holdings.loaded,
            report.history.loaded,
            report.skipped_rows,
        )
        return report

    def _load_cash(self, account: Account, report: LoadReport) -> None:
        path = self._data_dir / CASH_FILE
        if not path.exists():
            return
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            report.failed_stores.append(CASH_FILE)
            return

        tokens = text.split()
        cash = _parse_float(tokens[0]) if tokens else None
        if cash is None or cash < -account.epsilon:
            logger.warning("Ignoring malformed cash value in %s; keeping default cash.", path)
            return
        account.set_cash(cash)
        report.cash_loaded = True

    def _load_holdings(self, account: Account, report: LoadReport) -> None:
        rows = self._read_rows(HOLDINGS_FILE, report)
        if rows is None:
            return
        stats = report.holdings
        for line_no, row in rows:
            parsed = _parse_holding(row)
            if parsed is None:
                _skip(stats, HOLDINGS_FILE, line_no, row)
                continue
            symbol, quantity = parsed
            account.adjust_position(symbol, quantity)
            stats.loaded += 1

    def _load_history(self, account: Account, report: LoadReport) -> None:
        rows = self._read_rows(HISTORY_FILE, report)
        if rows is None:
            return
        stats = report.history
        for line_no, row in rows:
            snapshot = _parse_snapshot(row)
            if snapshot is None:
                _skip(stats, HISTORY_FILE, line_no, row)
                continue
            account.append_snapshot(snapshot)
            stats.loaded += 1

    def _read_rows(self, name: str, report: LoadReport) -> list[tuple[int, list[str]]] | None:
        """Return the non-blank data rows of *name* (header dropped), numbered.

        ``None`` means the file is absent or unreadable.
        """
        path = self._data_dir / name
        if not path.exists():
            return None
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                rows = list(csv.reader(fh))
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            logger.error("Failed to read %s: %s", path, exc)
            report.failed_stores.append(name)
            return None
        # First line is the header; line numbers are 1-based.
        return [(idx, row) for idx, row in enumerate(rows[1:], start=2) if row]

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, account: Account) -> dict[str, bool]:
        """Write cash, holdings and history. Returns per-file success."""
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Failed to create data directory %s: %s", self._data_dir, exc)
            return {CASH_FILE: False, HOLDINGS_FILE: False, HISTORY_FILE: False}

        status = {
            CASH_FILE: self._write(CASH_FILE, lambda fh: fh.write(f"{account.cash!r}\n")),
            HOLDINGS_FILE: self._write_rows(
                HOLDINGS_FILE,
                HOLDINGS_HEADER,
                ([p.symbol, p.quantity] for p in account.positions),
            ),
            HISTORY_FILE: self._write_rows(
                HISTORY_FILE,
                HISTORY_HEADER,
                ([s.date.isoformat(), repr(s.total_value)] for s in account.performance),
            ),
        }
        if all(status.values()):
            logger.info("Saved state to %s", self._data_dir)
        return status

    def _write_rows(self, name: str, header: list[str], rows) -> bool:
        def _emit(fh) -> None:
            writer = csv.writer(fh, lineterminator="\n")
            writer.writerow(header)
            writer.writerows(rows)

        return self._write(name, _emit)

    def _write(self, name: str, emit) -> bool:
        path = self._data_dir / name
        try:
            with path.open("w", encoding="utf-8", newline="") as fh:
                emit(fh)
        except OSError as exc:
            logger.error("Failed to save %s: %s", path, exc)
            return False
        return True


# ------------------------------------------------------------------
# Row parsing
# ------------------------------------------------------------------

def _parse_float(text: str) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_holding(row: list[str]) -> tuple[str, int] | None:
    """Parse ``symbol,quantity``; ``None`` if the row is malformed."""
    if len(row) != 2:
        return None
    symbol = row[0].strip().upper()
    if not symbol:
        return None
    try:
        quantity = int(row[1].strip())
    except ValueError:
        return None
    return symbol, quantity


def _parse_snapshot(row: list[str]) -> Snapshot | None:
    """Parse ``date,total_value``; ``None`` if the row is malformed."""
    if len(row) != 2:
        return None
    try:
        date = dt.date.fromisoformat(row[0].strip())
    except ValueError:
        return None
    value = _parse_float(row[1])
    if value is None:
        return None
    return Snapshot(date=date, total_value=value)


def _skip(stats: StoreLoadStats, name: str, line_no: int, row: list[str]) -> None:
    stats.skipped += 1
    logger.warning("Skipping malformed row %d in %s: %r", line_no, name, ",".join(row))
