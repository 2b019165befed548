"""Simulator configuration models, loaded from YAML.

These live in ``models/`` because they are shared data contracts used by the
market, the account ledger, the persistence layer and the CLI.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class InstrumentSeed(BaseModel):
    """One instrument listed in the market at startup."""

    symbol: str = Field(description="Ticker symbol, e.g. 'AAPL'. Upper-cased by the market.")
    name: str = Field(description="Display name, e.g. 'Apple Inc.'.")
    price: float = Field(gt=0, description="Initial price.")


DEFAULT_INSTRUMENTS: list[InstrumentSeed] = [
    InstrumentSeed(symbol="AAPL", name="Apple Inc.", price=190.00),
    InstrumentSeed(symbol="MSFT", name="Microsoft", price=420.00),
    InstrumentSeed(symbol="GOOGL", name="Alphabet", price=165.00),
    InstrumentSeed(symbol="AMZN", name="Amazon", price=180.00),
    InstrumentSeed(symbol="TSLA", name="Tesla", price=250.00),
]


class MarketConfig(BaseModel):
    """Configuration for the simulated market."""

    instruments: list[InstrumentSeed] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_INSTRUMENTS],
        description="Instruments listed at startup, in display order.",
    )
    max_tick_pct: float = Field(
        default=3.0,
        gt=0,
        description="Largest absolute percentage move applied to a price in one tick.",
    )
    price_floor: float = Field(
        default=0.01,
        gt=0,
        description="Prices never drop below this value.",
    )
    seed: int | None = Field(
        default=None,
        description="Optional seed for the price random walk (reproducible runs).",
    )


class AccountConfig(BaseModel):
    """Configuration for the account ledger."""

    initial_cash: float = Field(
        default=10_000.0,
        ge=0,
        description="Starting cash, used only when no persisted cash value exists.",
    )
    epsilon: float = Field(
        default=1e-9,
        ge=0,
        description="Floating-point tolerance for the solvency check.",
    )


class PersistenceConfig(BaseModel):
    """Where account state is saved between sessions."""

    data_dir: str = Field(
        default="portfolio_data",
        description="Directory holding cash.txt, holdings.csv and history.csv.",
    )


class SimulatorConfig(BaseModel):
    """Top-level configuration for a simulator session.

    Every section has defaults, so an empty mapping (or no file at all) is a
    valid configuration.
    """

    market: MarketConfig = Field(default_factory=MarketConfig)
    account: AccountConfig = Field(default_factory=AccountConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulatorConfig:
        """Load and validate a ``SimulatorConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a YAML mapping. An empty file
        yields the default configuration.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
