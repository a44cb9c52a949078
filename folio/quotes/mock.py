"""Static quote provider backed by built-in tables."""

import random
from datetime import datetime
from typing import Optional

from folio.models import MarketIndex, MarketIndices, MarketSnapshot, Quote, SearchResult
from folio.quotes.base import MAX_SEARCH_RESULTS, MIN_SEARCH_CHARS, QuotePort

# symbol -> (price, change, change_percent)
MOCK_PRICES: dict[str, tuple[float, float, float]] = {
    "AAPL": (185.20, 2.15, 1.17),
    "MSFT": (378.85, -1.25, -0.33),
    "GOOGL": (142.56, 0.85, 0.60),
    "AMZN": (153.45, 3.22, 2.14),
    "TSLA": (248.50, 5.20, 2.13),
    "NVDA": (195.40, 8.75, 4.69),
    "META": (325.60, -2.40, -0.73),
    "NFLX": (485.75, 12.30, 2.60),
    "AMD": (115.80, 4.55, 4.09),
    "INTC": (35.20, -0.85, -2.36),
    "SPY": (445.20, 1.80, 0.41),
    "QQQ": (378.90, 2.15, 0.57),
    "VTI": (240.85, 1.25, 0.52),
    "BTC-USD": (67500.00, 1250.00, 1.89),
    "ETH-USD": (3850.00, 125.50, 3.37),
}

MOCK_ASSETS: list[SearchResult] = [
    SearchResult(ticker="AAPL", name="Apple Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="MSFT", name="Microsoft Corporation", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="GOOGL", name="Alphabet Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="AMZN", name="Amazon.com Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="TSLA", name="Tesla Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="NVDA", name="NVIDIA Corporation", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="META", name="Meta Platforms Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="NFLX", name="Netflix Inc.", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="AMD", name="Advanced Micro Devices", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="INTC", name="Intel Corporation", type="equity", exchange="NASDAQ"),
    SearchResult(ticker="SPY", name="SPDR S&P 500 ETF Trust", type="etf", exchange="NYSE"),
    SearchResult(ticker="QQQ", name="Invesco QQQ Trust", type="etf", exchange="NASDAQ"),
    SearchResult(ticker="VTI", name="Vanguard Total Stock Market ETF", type="etf", exchange="NYSE"),
    SearchResult(ticker="BTC-USD", name="Bitcoin USD", type="cryptocurrency", exchange="CCC"),
    SearchResult(ticker="ETH-USD", name="Ethereum USD", type="cryptocurrency", exchange="CCC"),
]

MOCK_INDICES = MarketIndices(
    sp500=MarketIndex(value=4567.89, change=23.45, change_percent=0.52),
    nasdaq=MarketIndex(value=14234.56, change=67.89, change_percent=0.48),
    dow=MarketIndex(value=34567.12, change=123.45, change_percent=0.36),
)


class MockQuoteProvider(QuotePort):
    """Quote provider that never touches the network.

    Known symbols get fixed prices. Unknown symbols get a pseudo-random
    price between 100 and 300; pass `seed` for repeatable output.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    async def fetch_quote(self, ticker: str) -> Quote:
        symbol = ticker.upper()
        if symbol in MOCK_PRICES:
            price, change, change_percent = MOCK_PRICES[symbol]
        else:
            price = 100 + self._random.random() * 200
            change = self._random.random() * 10 - 5
            change_percent = self._random.random() * 4 - 2

        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            currency="USD",
            name=symbol,
            timestamp=datetime.now(),
        )

    async def search_symbols(self, query: str) -> list[SearchResult]:
        if not query or len(query) < MIN_SEARCH_CHARS:
            return []

        needle = query.lower()
        matches = [
            asset
            for asset in MOCK_ASSETS
            if needle in asset.ticker.lower() or needle in asset.name.lower()
        ]
        return matches[:MAX_SEARCH_RESULTS]

    async def fetch_market_snapshot(self) -> MarketSnapshot:
        return MarketSnapshot(as_of=datetime.now(), status="OPEN", indices=MOCK_INDICES)
