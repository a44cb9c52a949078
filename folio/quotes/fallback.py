"""Provider composition that falls back when the primary is unavailable."""

import logging

from folio.models import MarketSnapshot, Quote, SearchResult
from folio.quotes.base import QuotePort, QuoteUnavailableError

logger = logging.getLogger(__name__)


class FallbackQuoteProvider(QuotePort):
    """Ask `primary` first and `fallback` when it is unavailable.

    Errors from the fallback propagate to the caller.
    """

    def __init__(self, primary: QuotePort, fallback: QuotePort):
        self.primary = primary
        self.fallback = fallback

    async def fetch_quote(self, ticker: str) -> Quote:
        try:
            return await self.primary.fetch_quote(ticker)
        except QuoteUnavailableError as exc:
            logger.warning("Price API unavailable for %s, using fallback: %s", ticker, exc)
            return await self.fallback.fetch_quote(ticker)

    async def search_symbols(self, query: str) -> list[SearchResult]:
        try:
            return await self.primary.search_symbols(query)
        except QuoteUnavailableError as exc:
            logger.warning("Symbol search unavailable, using fallback: %s", exc)
            return await self.fallback.search_symbols(query)

    async def fetch_market_snapshot(self) -> MarketSnapshot:
        try:
            return await self.primary.fetch_market_snapshot()
        except QuoteUnavailableError as exc:
            logger.warning("Market snapshot unavailable, using fallback: %s", exc)
            return await self.fallback.fetch_market_snapshot()
