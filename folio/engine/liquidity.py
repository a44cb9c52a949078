"""Cash liquidity across currencies."""

from typing import Iterable

from folio.engine.currency import to_usd
from folio.models import Liquidity, Position


def liquidity(positions: Iterable[Position]) -> Liquidity:
    """Sum cash positions into a USD-equivalent total.

    Cash positions keep their insertion order.
    """
    cash_positions = [p for p in positions if p.is_cash]
    total = sum(to_usd(p.quantity, p.base_currency) for p in cash_positions)
    return Liquidity(total_usd=total, cash_positions=cash_positions)
