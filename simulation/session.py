"""Simulator session: the orchestration layer around account and market.

Lifecycle:
    1. Build the market and a fresh account from config.
    2. ``start()``: restore persisted state; record an opening snapshot if
       the performance series is still empty.
    3. Any sequence of ``buy``/``sell``/``advance_market``/``record_snapshot``.
    4. ``save()`` at the end.

All state is owned by the session instance and passed explicitly to the
components; nothing is module-global.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable

from models.config import SimulatorConfig
from models.order import TradeResult
from models.performance import Snapshot
from models.persistence import LoadReport
from simulation.account import Account
from simulation.broker import Broker
from simulation.market import Market, RandomSource
from simulation.performance import record_snapshot
from simulation.persistence import PortfolioStore
from simulation.valuation import total_value

logger = logging.getLogger(__name__)


class PortfolioSession:
    """Owns one account, one market and their broker for a single run."""

    def __init__(
        self,
        config: SimulatorConfig,
        rng: RandomSource | None = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._config = config
        self._clock = clock
        self.market = Market.from_config(config.market, rng=rng)
        self.account = Account.from_config(config.account)
        self.broker = Broker(self.account, self.market, clock=clock)
        self.store = PortfolioStore(config.persistence.data_dir)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> LoadReport:
        """Load persisted state and make sure the series has a baseline."""
        report = self.store.load(self.account)
        if report.skipped_rows or report.failed_stores:
            logger.warning(
                "Persisted state partially loaded: %d row(s) skipped, failed stores: %s",
                report.skipped_rows,
                report.failed_stores or "none",
            )
        if not self.account.performance:
            self.record_snapshot()
        return report

    def save(self) -> dict[str, bool]:
        return self.store.save(self.account)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def buy(self, symbol: str, quantity: int) -> TradeResult:
        return self.broker.buy(symbol, quantity)

    def sell(self, symbol: str, quantity: int) -> TradeResult:
        return self.broker.sell(symbol, quantity)

    def advance_market(self) -> Snapshot:
        """Move prices one simulated day and snapshot the account."""
        self.market.tick()
        logger.info("Market advanced one day.")
        return self.record_snapshot()

    def record_snapshot(self) -> Snapshot:
        return record_snapshot(self.account, self.market, self._clock())

    def total_value(self) -> float:
        return total_value(self.account, self.market)
