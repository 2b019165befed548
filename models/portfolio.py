"""Portfolio state models."""

from pydantic import BaseModel, Field


class Position(BaseModel):
    """Quantity of one instrument held. Never zero or negative."""

    symbol: str
    quantity: int = Field(gt=0)


class PortfolioSnapshot(BaseModel):
    """Cash and positions (symbol -> shares) at one instant.

    A detached copy of the ledger: mutating it never touches the account.
    """

    cash: float
    positions: dict[str, int]
