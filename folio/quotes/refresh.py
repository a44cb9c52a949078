"""Bulk requote of non-cash positions."""

import asyncio
import logging
from typing import Iterable

from folio.models import PortfolioState, Position
from folio.quotes.base import QuotePort

logger = logging.getLogger(__name__)


async def fetch_prices(positions: Iterable[Position], port: QuotePort) -> dict[int, float]:
    """Requote every non-cash position concurrently.

    All fetches run as one batch and are joined before anything is
    returned. A failed fetch, or a quote without a price, keeps the
    position's existing price; it never aborts the batch.

    Args:
        positions: Positions to requote. Cash positions are skipped.
        port: Quote provider.

    Returns:
        Mapping of position id to its new current price.
    """
    targets = [p for p in positions if not p.is_cash]
    results = await asyncio.gather(
        *(port.fetch_quote(p.ticker) for p in targets),
        return_exceptions=True,
    )

    prices: dict[int, float] = {}
    for position, result in zip(targets, results):
        if isinstance(result, BaseException):
            logger.warning("Keeping last price for %s: %s", position.ticker, result)
            prices[position.id] = position.current_price
        else:
            prices[position.id] = result.price or position.current_price
    return prices


def apply_prices(portfolio: PortfolioState, prices: dict[int, float]) -> PortfolioState:
    """Set current prices from a refresh; cash positions are never touched."""
    positions = [
        p.model_copy(update={"current_price": prices[p.id]})
        if not p.is_cash and p.id in prices
        else p
        for p in portfolio.positions
    ]
    return PortfolioState(positions=positions, ledger=portfolio.ledger)


async def refresh_prices(portfolio: PortfolioState, port: QuotePort) -> PortfolioState:
    """Requote the portfolio and return the updated state."""
    prices = await fetch_prices(portfolio.positions, port)
    logger.info("Refreshed %d prices", len(prices))
    return apply_prices(portfolio, prices)
