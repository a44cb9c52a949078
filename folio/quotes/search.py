"""Debounced search-as-you-type."""

import asyncio
import logging
from typing import Callable, Optional

from folio.models import SearchResult
from folio.quotes.base import MIN_SEARCH_CHARS, QuotePort, QuoteUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.35


class SearchDebouncer:
    """Run symbol searches only after typing pauses.

    Every call to `schedule_search` issues a new generation token and
    cancels the debounce timer of the previous query. A search that is
    already in flight is not cancelled, but its results are dropped when
    they arrive if a newer token has been issued since.

    Must be used from inside a running event loop.

    Args:
        port: Quote provider used for the search.
        on_results: Optional callback receiving every applied result list.
        delay: Debounce window in seconds.
        min_chars: Shorter queries clear the results without searching.
    """

    def __init__(
        self,
        port: QuotePort,
        on_results: Optional[Callable[[list[SearchResult]], None]] = None,
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
        min_chars: int = MIN_SEARCH_CHARS,
    ):
        self._port = port
        self._on_results = on_results
        self._delay = delay
        self._min_chars = min_chars
        self._generation = 0
        self._timer: Optional[asyncio.Task] = None
        self._tasks: set[asyncio.Task] = set()
        self.results: list[SearchResult] = []
        self.in_progress = False

    @property
    def latest_token(self) -> int:
        return self._generation

    def schedule_search(self, query: str) -> int:
        """Schedule a search for `query`, superseding any earlier one.

        Returns:
            The generation token issued for this query.
        """
        self._generation += 1
        token = self._generation

        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

        if not query or len(query) < self._min_chars:
            self._apply(token, [])
            return token

        self.in_progress = True
        task = asyncio.get_running_loop().create_task(self._run(query, token))
        self._timer = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return token

    async def _run(self, query: str, token: int) -> None:
        await asyncio.sleep(self._delay)
        if self._timer is not None and token == self._generation:
            # Past the debounce window; a newer query must not cancel the fetch.
            self._timer = None

        try:
            results = await self._port.search_symbols(query)
        except QuoteUnavailableError as exc:
            logger.warning("Asset search failed: %s", exc)
            results = []

        self._apply(token, results)

    def _apply(self, token: int, results: list[SearchResult]) -> bool:
        if token != self._generation:
            logger.debug("Dropping stale search results for token %d", token)
            return False

        self.results = results
        self.in_progress = False
        if self._on_results is not None:
            self._on_results(results)
        return True

    async def wait(self) -> None:
        """Wait for every scheduled search to finish or be cancelled."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
