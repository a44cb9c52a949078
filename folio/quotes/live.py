"""Yahoo Finance quote provider."""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from folio.models import MarketIndex, MarketIndices, MarketSnapshot, Quote, SearchResult
from folio.quotes.base import (
    MAX_SEARCH_RESULTS,
    MIN_SEARCH_CHARS,
    QuotePort,
    QuoteUnavailableError,
)
from folio.quotes.market import market_status

logger = logging.getLogger(__name__)

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
SEARCH_URL = "https://query1.finance.yahoo.com/v1/finance/search"

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

INDEX_SYMBOLS = {
    "sp500": "^GSPC",
    "nasdaq": "^IXIC",
    "dow": "^DJI",
}

# Raised while reading a payload of unexpected shape; pydantic's
# ValidationError is a ValueError.
PARSE_ERRORS = (KeyError, IndexError, TypeError, AttributeError, ValueError)


class YahooQuoteProvider(QuotePort):
    """Quote provider backed by the public Yahoo Finance endpoints.

    Any transport error, HTTP error status or unexpected payload is
    raised as QuoteUnavailableError.

    Args:
        timeout: Request timeout in seconds.
        client: Optional shared AsyncClient. When omitted a client is
            opened per request.
    """

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self._timeout = timeout
        self._client = client

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict:
        headers = {"User-Agent": USER_AGENT}
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("GET %s failed: %s", url, exc)
            raise QuoteUnavailableError(f"Request to {url} failed: {exc}") from exc

    async def _chart_meta(self, symbol: str) -> dict:
        data = await self._get_json(
            CHART_URL.format(symbol=symbol),
            {"interval": "1m", "range": "1d"},
        )
        try:
            return data["chart"]["result"][0]["meta"]
        except PARSE_ERRORS as exc:
            raise QuoteUnavailableError(f"No chart data for {symbol}") from exc

    @staticmethod
    def _price_move(meta: dict) -> tuple[float, float, float]:
        previous_close = meta.get("previousClose") or meta.get("chartPreviousClose")
        price = meta.get("regularMarketPrice") or previous_close
        if price is None:
            raise QuoteUnavailableError("Chart data has no price")
        if not previous_close:
            return float(price), 0.0, 0.0
        change = float(price) - float(previous_close)
        return float(price), change, change / float(previous_close) * 100

    async def fetch_quote(self, ticker: str) -> Quote:
        symbol = ticker.upper()
        meta = await self._chart_meta(symbol)

        try:
            price, change, change_percent = self._price_move(meta)
            return Quote(
                symbol=symbol,
                price=price,
                change=change,
                change_percent=change_percent,
                currency=meta.get("currency") or "USD",
                name=meta.get("longName") or meta.get("shortName") or symbol,
                timestamp=datetime.now(),
            )
        except PARSE_ERRORS as exc:
            raise QuoteUnavailableError(f"Malformed quote for {symbol}: {exc}") from exc

    async def search_symbols(self, query: str) -> list[SearchResult]:
        if not query or len(query) < MIN_SEARCH_CHARS:
            return []

        data = await self._get_json(
            SEARCH_URL,
            {"q": query, "quotesCount": 10, "newsCount": 0},
        )

        results = []
        try:
            for item in (data.get("quotes") or [])[:MAX_SEARCH_RESULTS]:
                symbol = item.get("symbol")
                if not symbol:
                    continue
                results.append(
                    SearchResult(
                        ticker=symbol,
                        name=item.get("shortname") or item.get("longname") or symbol,
                        type=(item.get("typeDisp") or "equity").lower(),
                        exchange=item.get("exchange") or "",
                    )
                )
        except PARSE_ERRORS as exc:
            raise QuoteUnavailableError(f"Malformed search results for {query!r}: {exc}") from exc
        return results

    async def fetch_market_snapshot(self) -> MarketSnapshot:
        indices = {}
        for key, symbol in INDEX_SYMBOLS.items():
            meta = await self._chart_meta(symbol)
            try:
                price, change, change_percent = self._price_move(meta)
                indices[key] = MarketIndex(
                    value=price, change=change, change_percent=change_percent
                )
            except PARSE_ERRORS as exc:
                raise QuoteUnavailableError(f"Malformed index data for {symbol}: {exc}") from exc

        return MarketSnapshot(
            as_of=datetime.now(),
            status=market_status(),
            indices=MarketIndices(**indices),
        )
