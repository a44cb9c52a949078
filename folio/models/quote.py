"""Market data models returned by quote providers."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class Quote(BaseModel):
    """Represents a price quote for a symbol."""

    symbol: str = Field(..., description="Trading symbol")
    price: float = Field(..., ge=0, description="Latest price")
    change: float = Field(..., description="Price change from previous close")
    change_percent: float = Field(..., description="Percentage change")
    currency: str = Field(default="USD", description="Quote currency")
    name: str = Field(..., description="Instrument name")
    timestamp: datetime = Field(default_factory=datetime.now, description="Quote time")

    model_config = {"frozen": True}


class SearchResult(BaseModel):
    """Represents a symbol search match."""

    ticker: str = Field(..., min_length=1, description="Trading symbol")
    name: str = Field(..., description="Instrument name")
    type: str = Field(default="equity", description="Instrument type (equity, etf, ...)")
    exchange: str = Field(default="", description="Listing exchange")

    model_config = {"frozen": True}


class MarketIndex(BaseModel):
    """Level and daily move of a market index."""

    value: float = Field(..., description="Index level")
    change: float = Field(..., description="Point change")
    change_percent: float = Field(..., description="Percentage change")

    model_config = {"frozen": True}


class MarketIndices(BaseModel):
    sp500: MarketIndex
    nasdaq: MarketIndex
    dow: MarketIndex

    model_config = {"frozen": True}


class MarketSnapshot(BaseModel):
    """Represents a broad market overview."""

    as_of: datetime = Field(default_factory=datetime.now, description="Snapshot time")
    status: Literal["OPEN", "CLOSED"] = Field(..., description="Market session status")
    indices: MarketIndices

    model_config = {"frozen": True}
