"""PortfolioState data model."""

from typing import Optional

from pydantic import BaseModel, Field

from folio.models.position import Position
from folio.models.trade import TradeRecord


class PortfolioState(BaseModel):
    """Source of truth for a portfolio: positions plus the append-only ledger.

    The ledger is kept in the order records were appended. Use `history`
    for the newest-first display order.
    """

    positions: list[Position] = Field(default_factory=list)
    ledger: list[TradeRecord] = Field(default_factory=list)

    model_config = {"frozen": True}

    def find_position(self, ticker: str) -> Optional[Position]:
        """Find a position by ticker, ignoring case."""
        wanted = ticker.lower()
        return next((p for p in self.positions if p.ticker.lower() == wanted), None)

    def get_position(self, position_id: int) -> Optional[Position]:
        return next((p for p in self.positions if p.id == position_id), None)

    @property
    def history(self) -> list[TradeRecord]:
        """Ledger records, newest first."""
        return list(reversed(self.ledger))
