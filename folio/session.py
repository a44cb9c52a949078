"""Portfolio session: the owner of positions, ledger and identity."""

import logging
from datetime import date
from typing import Callable, Optional

from folio.engine import (
    USD_CASH,
    IdGenerator,
    SequentialIdGenerator,
    TradeExecutor,
    apply_deposit,
    apply_edit,
    apply_onboard,
    liquidity,
    remove_position,
    valuate,
)
from folio.engine.trade import usd_cash_position
from folio.models import (
    ActionResult,
    DepositCommand,
    EditCommand,
    Liquidity,
    OnboardCommand,
    PortfolioState,
    TradeCommand,
    TradeRecord,
    Valuation,
)
from folio.quotes import QuotePort, apply_prices, fetch_prices

logger = logging.getLogger(__name__)


def ensure_usd_cash(portfolio: PortfolioState, ids: IdGenerator) -> PortfolioState:
    """Make sure a USD-CASH position exists so buys always have cash to debit."""
    if any(p.ticker == USD_CASH for p in portfolio.positions):
        return portfolio
    return PortfolioState(
        positions=[*portfolio.positions, usd_cash_position(ids.next_id(), 0.0)],
        ledger=portfolio.ledger,
    )


class PortfolioSession:
    """Mutable session wrapping the pure portfolio transitions.

    Each `apply_*` handler runs one transition against the current state,
    keeps the new state and returns the result. Valuation and liquidity
    are recomputed from the positions on every call.

    Args:
        state: Starting state; an empty portfolio when omitted.
        ids: Identity generator; by default continues after the largest
            id already present in `state`.
        today: Clock for ledger trade dates.
    """

    def __init__(
        self,
        state: Optional[PortfolioState] = None,
        ids: Optional[IdGenerator] = None,
        today: Callable[[], date] = date.today,
    ):
        state = state or PortfolioState()
        used = [p.id for p in state.positions] + [r.id for r in state.ledger]
        self._ids = ids or SequentialIdGenerator.after(used)
        self._today = today
        self.state = ensure_usd_cash(state, self._ids)
        self.executor = TradeExecutor(self._ids, today=today)

    def _commit(self, transition: tuple[PortfolioState, ActionResult]) -> ActionResult:
        self.state, result = transition
        return result

    def apply_trade(self, command: TradeCommand) -> ActionResult:
        return self._commit(self.executor.execute(self.state, command))

    def apply_deposit(self, command: DepositCommand) -> ActionResult:
        return self._commit(apply_deposit(self.state, command, self._ids, self._today))

    def apply_onboard(self, command: OnboardCommand) -> ActionResult:
        return self._commit(apply_onboard(self.state, command, self._ids))

    def apply_edit(self, command: EditCommand) -> ActionResult:
        return self._commit(apply_edit(self.state, command))

    def remove_position(self, position_id: int) -> ActionResult:
        return self._commit(remove_position(self.state, position_id))

    async def apply_price_refresh(self, port: QuotePort) -> PortfolioState:
        """Requote all non-cash positions and keep the refreshed state.

        Trades applied while the quotes were in flight are kept; only
        prices of positions still present are updated.
        """
        prices = await fetch_prices(self.state.positions, port)
        self.state = apply_prices(self.state, prices)
        return self.state

    def valuation(self) -> Valuation:
        return valuate(self.state.positions)

    def liquidity(self) -> Liquidity:
        return liquidity(self.state.positions)

    def history(self) -> list[TradeRecord]:
        """Ledger records, newest first."""
        return self.state.history
