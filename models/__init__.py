"""Data models for the portfolio simulator.

The market, ledger, persistence layer and CLI all import from models.
"""

from models.config import (
    AccountConfig,
    InstrumentSeed,
    MarketConfig,
    PersistenceConfig,
    SimulatorConfig,
)
from models.instrument import PRICE_FLOOR, Instrument
from models.order import Order, RejectionReason, Side, TradeResult, Transaction
from models.performance import PerformancePoint, Snapshot
from models.persistence import LoadReport, StoreLoadStats
from models.portfolio import PortfolioSnapshot, Position

__all__ = [
    # config
    "AccountConfig",
    "InstrumentSeed",
    "MarketConfig",
    "PersistenceConfig",
    "SimulatorConfig",
    # instrument
    "PRICE_FLOOR",
    "Instrument",
    # order
    "Order",
    "RejectionReason",
    "Side",
    "TradeResult",
    "Transaction",
    # performance
    "PerformancePoint",
    "Snapshot",
    # persistence
    "LoadReport",
    "StoreLoadStats",
    # portfolio
    "PortfolioSnapshot",
    "Position",
]
