"""Interactive numbered menu driving a ``PortfolioSession``.

Input and output are injected so the loop can run against scripted input.
End of input behaves like "Save & Exit".
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from simulation.reports import (
    format_market,
    format_performance,
    format_portfolio,
    format_trade,
    format_transactions,
)
from simulation.session import PortfolioSession

logger = logging.getLogger(__name__)

MENU = """
===== STOCK TRADING PLATFORM =====
1) View Market
2) Advance Market (new day)
3) Buy
4) Sell
5) View Portfolio
6) View Performance
7) View Transactions
8) Record Snapshot (today)
9) Save & Exit"""


class _EndOfInput(Exception):
    pass


class MenuLoop:
    """Reads menu choices and dispatches them to the session."""

    def __init__(
        self,
        session: PortfolioSession,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._session = session
        self._read = read
        self._write = write
        self._actions: dict[int, Callable[[], bool]] = {
            1: self._view_market,
            2: self._advance_market,
            3: self._buy,
            4: self._sell,
            5: self._view_portfolio,
            6: self._view_performance,
            7: self._view_transactions,
            8: self._record_snapshot,
            9: self._save_and_exit,
        }

    def run(self) -> None:
        """Loop until the user saves and exits (or input runs out)."""
        running = True
        while running:
            self._write(MENU)
            try:
                raw = self._prompt("Choose: ")
            except _EndOfInput:
                self._save_and_exit()
                return
            try:
                choice = int(raw)
            except ValueError:
                self._write("Invalid input.")
                continue

            action = self._actions.get(choice)
            if action is None:
                self._write("Unknown option.")
                continue
            try:
                running = action()
            except _EndOfInput:
                self._save_and_exit()
                return

    # ------------------------------------------------------------------
    # Actions (return False to stop the loop)
    # ------------------------------------------------------------------

    def _view_market(self) -> bool:
        self._write(format_market(self._session.market))
        return True

    def _advance_market(self) -> bool:
        self._session.advance_market()
        self._write("Market advanced one day.")
        return True

    def _buy(self) -> bool:
        symbol = self._prompt("Enter symbol to BUY: ").strip().upper()
        instrument = self._session.market.get(symbol)
        if instrument is None:
            self._write("Unknown symbol.")
            return True
        quantity = self._prompt_quantity(f"Price ${instrument.price:.2f}. Quantity: ")
        if quantity is not None:
            self._write(format_trade(self._session.buy(symbol, quantity)))
        return True

    def _sell(self) -> bool:
        symbol = self._prompt("Enter symbol to SELL: ").strip().upper()
        instrument = self._session.market.get(symbol)
        if instrument is None:
            self._write("Unknown symbol.")
            return True
        held = self._session.account.position_of(instrument.symbol)
        if held <= 0:
            self._write(f"You do not own {instrument.symbol}")
            return True
        quantity = self._prompt_quantity(f"You own {held}. Quantity to sell: ")
        if quantity is not None:
            self._write(format_trade(self._session.sell(symbol, quantity)))
        return True

    def _view_portfolio(self) -> bool:
        self._write(format_portfolio(self._session.account, self._session.market))
        return True

    def _view_performance(self) -> bool:
        self._write(format_performance(self._session.account.performance))
        return True

    def _view_transactions(self) -> bool:
        self._write(format_transactions(self._session.account.transactions))
        return True

    def _record_snapshot(self) -> bool:
        self._session.record_snapshot()
        self._write("Snapshot recorded.")
        return True

    def _save_and_exit(self) -> bool:
        status = self._session.save()
        failed = [name for name, ok in status.items() if not ok]
        if failed:
            self._write(f"Saved with errors (failed: {', '.join(failed)}). Bye!")
        else:
            self._write("Saved. Bye!")
        return False

    # ------------------------------------------------------------------
    # Input helpers
    # ------------------------------------------------------------------

    def _prompt(self, text: str) -> str:
        try:
            return self._read(text)
        except EOFError as exc:
            raise _EndOfInput from exc

    def _prompt_quantity(self, text: str) -> int | None:
        raw = self._prompt(text)
        try:
            return int(raw.strip())
        except ValueError:
            self._write("Invalid input.")
            return None
