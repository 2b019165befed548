"""Simulated market: instrument registry and bounded random-walk pricing.

Prices move once per ``tick()``: each instrument draws a uniform percentage
change in ``[-max_tick_pct, +max_tick_pct]`` and is clamped to the price
floor afterwards. The random source is injected so tests can pin the draw.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from models.config import MarketConfig
from models.instrument import PRICE_FLOOR, Instrument

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """The slice of ``random.Random`` the market needs."""

    def uniform(self, a: float, b: float) -> float: ...


class Market:
    """Ordered registry of instruments (symbol -> Instrument).

    Iteration order is insertion order so listings stay stable between
    ticks. Lookups are case-insensitive.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        max_tick_pct: float = 3.0,
        price_floor: float = PRICE_FLOOR,
    ) -> None:
        self._instruments: dict[str, Instrument] = {}
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._max_tick_pct = max_tick_pct
        self._price_floor = price_floor

    @classmethod
    def from_config(cls, config: MarketConfig, rng: RandomSource | None = None) -> Market:
        """Build a market listing every instrument in *config*.

        An explicit *rng* wins over ``config.seed``.
        """
        if rng is None and config.seed is not None:
            rng = random.Random(config.seed)
        market = cls(rng=rng, max_tick_pct=config.max_tick_pct, price_floor=config.price_floor)
        for seed in config.instruments:
            market.add_instrument(seed.symbol, seed.name, seed.price)
        logger.debug("Market seeded with %d instrument(s).", len(market))
        return market

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add_instrument(self, symbol: str, name: str, initial_price: float) -> Instrument:
        """List a new instrument. Re-adding a symbol replaces the old entry."""
        if initial_price <= 0:
            raise ValueError(
                f"Initial price must be positive, got {initial_price} for {symbol}."
            )
        instrument = Instrument(symbol=symbol, name=name, price=initial_price)
        if instrument.symbol in self._instruments:
            logger.warning("Instrument %s already listed; replacing it.", instrument.symbol)
        self._instruments[instrument.symbol] = instrument
        return instrument

    def get(self, symbol: str) -> Instrument | None:
        """Return the instrument for *symbol*, or ``None`` if it is not listed."""
        return self._instruments.get(symbol.strip().upper())

    def instruments(self) -> list[Instrument]:
        return list(self._instruments.values())

    def symbols(self) -> list[str]:
        return list(self._instruments)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.get(symbol) is not None

    def __len__(self) -> int:
        return len(self._instruments)

    # ------------------------------------------------------------------
    # Price model
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance every price by one simulated day."""
        bound = self._max_tick_pct
        for instrument in self._instruments.values():
            pct = self._rng.uniform(-bound, bound)
            # Injected sources may stray outside the closed interval.
            pct = min(bound, max(-bound, pct))
            instrument.set_price(instrument.price * (1.0 + pct / 100.0), self._price_floor)
        logger.debug("Market ticked %d instrument(s).", len(self._instruments))
