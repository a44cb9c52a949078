"""US market session status and snapshot polling."""

import asyncio
import logging
from datetime import datetime, time
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from folio.models import MarketSnapshot
from folio.quotes.base import QuotePort, QuoteUnavailableError

logger = logging.getLogger(__name__)

NEW_YORK = ZoneInfo("America/New_York")

# Regular session: 9:30 AM to 4:00 PM Eastern
MARKET_OPEN = time(9, 30)
MARKET_CLOSE = time(16, 0)

DEFAULT_POLL_SECONDS = 35.0


def is_market_open(now: Optional[datetime] = None) -> tuple[bool, str]:
    """Check if the US stock market is in its regular session.

    Args:
        now: Moment to check; defaults to the current time. Naive
            datetimes are taken as Eastern time.

    Returns:
        Tuple of (is_open, status_message).
    """
    if now is None:
        now = datetime.now(NEW_YORK)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=NEW_YORK)
    else:
        now = now.astimezone(NEW_YORK)

    if now.weekday() >= 5:  # Saturday = 5, Sunday = 6
        return False, "Market closed (Weekend). Next open: Monday 9:30 AM ET"

    current_time = now.time()
    if current_time < MARKET_OPEN:
        return False, "Market opens at 9:30 AM ET (Pre-market)"
    elif current_time >= MARKET_CLOSE:
        return False, "Market closed for today (Post-market)"
    return True, "Market is OPEN"


def market_status(now: Optional[datetime] = None) -> str:
    """OPEN or CLOSED for the given moment."""
    is_open, _ = is_market_open(now)
    return "OPEN" if is_open else "CLOSED"


async def watch_market(
    port: QuotePort,
    on_snapshot: Callable[[MarketSnapshot], None],
    interval: float = DEFAULT_POLL_SECONDS,
    iterations: Optional[int] = None,
) -> None:
    """Poll the market snapshot on a fixed cadence.

    A failed poll is logged and skipped; the loop keeps going.

    Args:
        port: Quote provider to poll.
        on_snapshot: Called with every snapshot received.
        interval: Seconds between polls.
        iterations: Stop after this many polls; None polls forever.
    """
    count = 0
    while iterations is None or count < iterations:
        try:
            on_snapshot(await port.fetch_market_snapshot())
        except QuoteUnavailableError as exc:
            logger.warning("Market snapshot unavailable: %s", exc)
        count += 1
        if iterations is None or count < iterations:
            await asyncio.sleep(interval)
