"""Quote provider interface for folio.

The portfolio engine never talks to a market-data source directly. It
consumes quotes, symbol search and market snapshots through `QuotePort`,
and the caller picks which implementation to plug in.
"""

from abc import ABC, abstractmethod

from folio.models import MarketSnapshot, Quote, SearchResult

MIN_SEARCH_CHARS = 2
MAX_SEARCH_RESULTS = 5


class QuoteUnavailableError(Exception):
    """Raised when a provider cannot produce the requested data."""
    pass


class QuotePort(ABC):
    """Abstract base class for quote providers.

    All providers (live Yahoo Finance, static mock, fallback chains) must
    inherit from this class and implement all abstract methods.
    """

    @abstractmethod
    async def fetch_quote(self, ticker: str) -> Quote:
        """Get the latest quote for a symbol.

        Args:
            ticker: Trading symbol.

        Returns:
            Quote with the latest price.

        Raises:
            QuoteUnavailableError: If no quote can be produced.
        """
        pass

    @abstractmethod
    async def search_symbols(self, query: str) -> list[SearchResult]:
        """Search instruments by symbol or name.

        Args:
            query: Search text. Queries shorter than two characters
                return an empty list.

        Returns:
            Up to five matches.

        Raises:
            QuoteUnavailableError: If the search backend fails.
        """
        pass

    @abstractmethod
    async def fetch_market_snapshot(self) -> MarketSnapshot:
        """Get the current level of the major US indices.

        Raises:
            QuoteUnavailableError: If the snapshot cannot be produced.
        """
        pass
