"""Position data model."""

from typing import Literal

from pydantic import BaseModel, Field

AssetClass = Literal["equity", "bond", "cryptocurrency", "cash"]

ASSET_CLASSES: tuple[str, ...] = ("equity", "bond", "cryptocurrency", "cash")


class Position(BaseModel):
    """Represents a single holding of one instrument or cash balance."""

    id: int = Field(..., description="Session-unique position identifier")
    ticker: str = Field(..., min_length=1, description="Uppercase trading symbol")
    name: str = Field(..., description="Display name")
    asset_class: AssetClass = Field(..., description="Asset class tag")
    quantity: float = Field(..., description="Units held")
    current_price: float = Field(..., ge=0, description="Last price in base currency")
    average_cost: float = Field(..., ge=0, description="Weighted-average acquisition price")
    base_currency: str = Field(default="USD", description="Currency of price and cost")

    model_config = {"frozen": True}

    @property
    def market_value(self) -> float:
        """Quantity times current price, in base currency."""
        return self.quantity * self.current_price

    @property
    def cost_basis(self) -> float:
        """Quantity times average cost, in base currency."""
        return self.quantity * self.average_cost

    @property
    def is_cash(self) -> bool:
        return self.asset_class == "cash"
