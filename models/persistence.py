"""Persistence outcome models."""

from pydantic import BaseModel, Field


class StoreLoadStats(BaseModel):
    """Row counts for one tabular store (holdings or history)."""

    loaded: int = 0
    skipped: int = 0


class LoadReport(BaseModel):
    """What a load actually applied.

    Loading is best-effort: malformed rows are skipped and counted, and a
    store that cannot be read at all is listed in ``failed_stores``.
    """

    cash_loaded: bool = False
    holdings: StoreLoadStats = Field(default_factory=StoreLoadStats)
    history: StoreLoadStats = Field(default_factory=StoreLoadStats)
    failed_stores: list[str] = []

    @property
    def skipped_rows(self) -> int:
        return self.holdings.skipped + self.history.skipped
