"""Command data models accepted by the portfolio executors.

Fields are optional on purpose: missing input is reported as a
validation rejection by the executor rather than a model error.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from folio.models.quote import SearchResult


class TradeCommand(BaseModel):
    """A buy or sell request."""

    action: Literal["buy", "sell"] = Field(..., description="Trade side")
    ticker: Optional[str] = Field(default=None, description="Trading symbol")
    quantity: Optional[float] = Field(default=None, description="Units to trade")
    price: Optional[float] = Field(default=None, description="Execution price (USD)")
    asset: Optional[SearchResult] = Field(
        default=None, description="Resolved metadata from symbol search"
    )

    model_config = {"frozen": True}


class DepositCommand(BaseModel):
    """A cash deposit in one currency."""

    currency: str = Field(default="USD", description="Currency code")
    amount: Optional[float] = Field(default=None, description="Amount in that currency")

    model_config = {"frozen": True}


class OnboardCommand(BaseModel):
    """A manually entered holding that did not come from a trade."""

    ticker: Optional[str] = None
    name: Optional[str] = None
    asset_class: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None
    trade_date: Optional[date] = None
    currency: Optional[str] = None

    model_config = {"frozen": True}


class EditCommand(BaseModel):
    """A manual correction of a position's quantity and price."""

    position_id: int
    quantity: Optional[float] = None
    price: Optional[float] = None

    model_config = {"frozen": True}
