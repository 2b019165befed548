"""Instrument model: a tradable symbol with a current price."""

from pydantic import BaseModel, Field, field_validator

PRICE_FLOOR = 0.01


class Instrument(BaseModel):
    """One listed instrument.

    ``symbol`` is always upper-case. ``price`` only changes through
    ``set_price``, which clamps it to the floor.
    """

    symbol: str
    name: str
    price: float = Field(gt=0)

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        return value.strip().upper()

    def set_price(self, price: float, floor: float = PRICE_FLOOR) -> None:
        """Set the current price, clamped to *floor*."""
        self.price = max(floor, price)
