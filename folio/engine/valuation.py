"""Portfolio valuation and allocation."""

from typing import Iterable

from folio.engine.currency import to_usd
from folio.models import AllocationEntry, Position, Valuation

CATEGORY_LABELS = {
    "equity": "Equities",
    "bond": "Bonds",
    "cryptocurrency": "Cryptocurrency",
    "cash": "Cash",
}

CATEGORY_COLORS = {
    "equity": "#3B82F6",
    "bond": "#10B981",
    "cryptocurrency": "#F59E0B",
    "cash": "#6B7280",
}

DEFAULT_COLOR = "#6B7280"


def position_value_usd(position: Position) -> float:
    """Market value of a position in USD."""
    return to_usd(position.market_value, position.base_currency)


def position_cost_usd(position: Position) -> float:
    """Cost basis of a position in USD."""
    return to_usd(position.cost_basis, position.base_currency)


def allocation(positions: Iterable[Position], total_value: float) -> list[AllocationEntry]:
    """Bucket market value by asset class.

    Buckets appear in the order their asset class is first seen among
    the positions. Percentages are 0 when `total_value` is 0.

    Args:
        positions: Positions to bucket.
        total_value: Total portfolio value in USD.

    Returns:
        One entry per asset class present.
    """
    buckets: dict[str, float] = {}
    for position in positions:
        buckets[position.asset_class] = (
            buckets.get(position.asset_class, 0.0) + position_value_usd(position)
        )

    return [
        AllocationEntry(
            category=CATEGORY_LABELS.get(asset_class, asset_class),
            percentage=(value / total_value * 100) if total_value != 0 else 0.0,
            market_value=value,
            color=CATEGORY_COLORS.get(asset_class, DEFAULT_COLOR),
        )
        for asset_class, value in buckets.items()
    ]


def valuate(positions: Iterable[Position]) -> Valuation:
    """Compute value, cost, unrealized gain and allocation of a position set.

    All figures are normalized to USD. The gain percentage is 0 when the
    total cost is 0.

    Args:
        positions: Current positions.

    Returns:
        Valuation for the positions.
    """
    positions = list(positions)
    total_value = sum(position_value_usd(p) for p in positions)
    total_cost = sum(position_cost_usd(p) for p in positions)
    gain = total_value - total_cost
    gain_percent = (gain / total_cost * 100) if total_cost != 0 else 0.0

    return Valuation(
        total_value=total_value,
        total_cost=total_cost,
        unrealized_gain=gain,
        unrealized_gain_percent=gain_percent,
        allocation=allocation(positions, total_value),
    )
