"""Derived valuation data models.

None of these are stored; they are recomputed from the position list on
every read.
"""

from pydantic import BaseModel, Field

from folio.models.position import Position


class AllocationEntry(BaseModel):
    """USD-equivalent exposure of one asset class."""

    category: str = Field(..., description="Display label of the asset class")
    percentage: float = Field(..., description="Share of total portfolio value")
    market_value: float = Field(..., description="Market value in USD")
    color: str = Field(..., description="Display color (hex)")

    model_config = {"frozen": True}


class Valuation(BaseModel):
    """Aggregate portfolio valuation."""

    total_value: float = Field(..., description="Market value in USD")
    total_cost: float = Field(..., description="Cost basis in USD")
    unrealized_gain: float = Field(..., description="Value minus cost, in USD")
    unrealized_gain_percent: float = Field(..., description="Gain relative to cost")
    allocation: list[AllocationEntry] = Field(default_factory=list)

    model_config = {"frozen": True}


class Liquidity(BaseModel):
    """USD-equivalent cash across all currencies."""

    total_usd: float = Field(..., description="Total cash in USD")
    cash_positions: list[Position] = Field(default_factory=list)

    model_config = {"frozen": True}
