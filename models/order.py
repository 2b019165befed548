"""Trading models: Side, Order, Transaction, TradeResult."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

Side = Literal["BUY", "SELL"]

RejectionReason = Literal[
    "unknown_symbol",
    "invalid_quantity",
    "not_owned",
    "insufficient_cash",
]


class Order(BaseModel):
    """Single order request: symbol, side, quantity.

    Quantity is not constrained here; the broker rejects non-positive values
    with ``invalid_quantity`` instead of failing validation.
    """

    symbol: str
    side: Side
    quantity: int


class Transaction(BaseModel):
    """Executed trade. Immutable once appended to the account's log."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    symbol: str
    side: Side
    quantity: int = Field(gt=0)
    price: float  # Unit price at execution

    @computed_field  # type: ignore[prop-decorator]
    @property
    def amount(self) -> float:
        return self.price * self.quantity

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign it applies to the position (SELL is negative)."""
        return self.quantity if self.side == "BUY" else -self.quantity


class TradeResult(BaseModel):
    """Outcome of a buy or sell.

    A rejected trade mutates nothing: ``transaction`` is ``None`` and
    ``reason``/``message`` explain why.
    """

    status: Literal["accepted", "rejected"]
    reason: RejectionReason | None = None
    transaction: Transaction | None = None  # Set only when status is "accepted"
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.status == "accepted"
