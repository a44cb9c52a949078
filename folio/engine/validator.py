"""Pre-trade checks for buys and sells."""

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from folio.models import Position, RejectionReason


class SellCheck(BaseModel):
    """Outcome of a sell feasibility check."""

    ok: bool = Field(..., description="Whether the sell can proceed")
    reason: Optional[RejectionReason] = Field(default=None, description="Why it cannot")
    held: float = Field(default=0.0, description="Quantity currently held")

    model_config = {"frozen": True}


def format_quantity(quantity: float) -> str:
    """Render a quantity without trailing zeros (10.0 -> '10')."""
    return f"{quantity:g}"


def find_by_ticker(ticker: str, positions: Iterable[Position]) -> Optional[Position]:
    wanted = ticker.lower()
    return next((p for p in positions if p.ticker.lower() == wanted), None)


def can_afford(quantity: float, price: float, available_usd: float) -> bool:
    """Check that a buy costs no more than the available cash."""
    return quantity * price <= available_usd


def can_sell(ticker: str, quantity: float, positions: Iterable[Position]) -> SellCheck:
    """Check that `quantity` of `ticker` is held.

    Selling exactly the held quantity is allowed.

    Args:
        ticker: Symbol to sell (case-insensitive).
        quantity: Units to sell.
        positions: Current positions.

    Returns:
        SellCheck with the held quantity and, when refused, the reason.
    """
    position = find_by_ticker(ticker, positions)
    if position is None:
        return SellCheck(ok=False, reason=RejectionReason.NOT_OWNED)
    if position.quantity < quantity:
        return SellCheck(
            ok=False,
            reason=RejectionReason.INSUFFICIENT_HOLDINGS,
            held=position.quantity,
        )
    return SellCheck(ok=True, held=position.quantity)


def describe_sell(
    ticker: Optional[str],
    quantity: Optional[float],
    positions: Iterable[Position],
) -> str:
    """Preview what a sell would do, for display while the user types.

    Returns an empty string while the input is incomplete or not positive.
    """
    if not ticker or quantity is None or quantity <= 0:
        return ""

    position = find_by_ticker(ticker, positions)
    if position is None:
        return "You do not own this asset"
    if position.quantity < quantity:
        return (
            f"You only own {format_quantity(position.quantity)} shares "
            f"(trying to sell {format_quantity(quantity)})"
        )
    if position.quantity == quantity:
        return "This will sell all your shares in this asset"
    return f"You will have {position.quantity - quantity:.2f} shares remaining"
