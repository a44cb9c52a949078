"""TradeRecord data model."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

TradeKind = Literal["buy", "sell", "deposit", "add"]


class TradeRecord(BaseModel):
    """Represents an immutable ledger entry."""

    id: int = Field(..., description="Session-unique record identifier")
    kind: TradeKind = Field(..., description="Action that produced the record")
    ticker: str = Field(..., min_length=1, description="Uppercase trading symbol")
    quantity: float = Field(..., gt=0, description="Units traded or deposited")
    price: float = Field(..., ge=0, description="Execution price")
    trade_date: date = Field(..., description="Calendar date of the action")
    trade_value: float = Field(..., description="Value of the action at execution")

    model_config = {"frozen": True}
