"""Quote providers and market-data helpers for folio."""

from folio.quotes.base import QuotePort, QuoteUnavailableError
from folio.quotes.fallback import FallbackQuoteProvider
from folio.quotes.live import YahooQuoteProvider
from folio.quotes.market import is_market_open, market_status, watch_market
from folio.quotes.mock import MockQuoteProvider
from folio.quotes.refresh import apply_prices, fetch_prices, refresh_prices
from folio.quotes.search import SearchDebouncer

__all__ = [
    "FallbackQuoteProvider",
    "MockQuoteProvider",
    "QuotePort",
    "QuoteUnavailableError",
    "SearchDebouncer",
    "YahooQuoteProvider",
    "apply_prices",
    "fetch_prices",
    "is_market_open",
    "market_status",
    "refresh_prices",
    "watch_market",
]
