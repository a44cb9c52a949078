"""Tests for the portfolio session and its command handlers.

**Feature: portfolio-ledger**
"""

import asyncio
from datetime import date

import pytest

from folio.demo import demo_state
from folio.models import (
    DepositCommand,
    EditCommand,
    OnboardCommand,
    PortfolioState,
    Quote,
    TradeCommand,
)
from folio.quotes import MockQuoteProvider, QuoteUnavailableError
from folio.session import PortfolioSession

TODAY = date(2024, 3, 15)


class FlakyQuotes(MockQuoteProvider):
    """Mock provider that fails for selected symbols."""

    def __init__(self, failing: set[str], prices: dict[str, float]):
        super().__init__(seed=1)
        self.failing = failing
        self.prices = prices
        self.requested: list[str] = []

    async def fetch_quote(self, ticker: str) -> Quote:
        self.requested.append(ticker)
        if ticker in self.failing:
            raise QuoteUnavailableError(f"{ticker} unavailable")
        return Quote(
            symbol=ticker,
            price=self.prices.get(ticker, 1.0),
            change=0.0,
            change_percent=0.0,
            name=ticker,
        )


class TestSessionInitialization:
    """
    **Feature: portfolio-ledger, Property 15: Cash Always Exists**
    """

    def test_empty_session_gets_usd_cash(self):
        session = PortfolioSession()

        cash = session.state.find_position("USD-CASH")
        assert cash is not None
        assert cash.quantity == 0
        assert session.liquidity().total_usd == 0

    def test_existing_usd_cash_kept(self):
        state = demo_state()
        session = PortfolioSession(state)

        assert session.state.positions == state.positions

    def test_ids_continue_after_existing(self):
        session = PortfolioSession(demo_state(), today=lambda: TODAY)

        session.apply_deposit(DepositCommand(currency="RUB", amount=1000))

        new_ids = {session.state.find_position("RUB-CASH").id, session.state.ledger[-1].id}
        assert min(new_ids) > 16
        assert len(new_ids) == 2


class TestSessionHandlers:
    """
    **Feature: portfolio-ledger, Property 16: Session Transitions**
    """

    def test_handlers_update_state_and_history(self):
        session = PortfolioSession(today=lambda: TODAY)

        assert session.apply_deposit(DepositCommand(currency="USD", amount=5000)).ok
        assert session.apply_trade(
            TradeCommand(action="buy", ticker="aapl", quantity=10, price=150.0)
        ).ok
        assert session.apply_onboard(
            OnboardCommand(
                ticker="TLT",
                name="iShares 20+ Year Bond ETF",
                asset_class="bond",
                quantity=10,
                price=95.0,
                trade_date=date(2023, 1, 2),
                currency="USD",
            )
        ).ok

        assert [r.kind for r in session.history()] == ["add", "buy", "deposit"]
        assert session.state.find_position("USD-CASH").quantity == 3500
        valuation = session.valuation()
        assert valuation.total_value == pytest.approx(3500 + 1500 + 950)
        assert [e.category for e in valuation.allocation] == ["Cash", "Equities", "Bonds"]

    def test_rejection_keeps_state(self):
        session = PortfolioSession(today=lambda: TODAY)
        before = session.state

        result = session.apply_trade(TradeCommand(action="buy", ticker="AAPL", quantity=1, price=10.0))

        assert result.status == "REJECTED"
        assert session.state is before
        assert session.executor.last_error.startswith("Insufficient funds")

    def test_buy_paid_from_foreign_cash_overdraws_usd(self):
        session = PortfolioSession(today=lambda: TODAY)
        session.apply_deposit(DepositCommand(currency="PLN", amount=1000))

        result = session.apply_trade(TradeCommand(action="buy", ticker="XYZ", quantity=250, price=1.0))

        assert result.ok
        assert session.state.find_position("USD-CASH").quantity == -250
        valuation = session.valuation()
        assert valuation.allocation[0].category == "Cash"
        assert valuation.allocation[0].percentage == pytest.approx(-300.0)

    def test_edit_and_remove(self):
        session = PortfolioSession(demo_state())

        assert session.apply_edit(EditCommand(position_id=3, quantity=55, price=141.2)).ok
        googl = session.state.get_position(3)
        assert (googl.quantity, googl.current_price, googl.average_cost) == (55, 141.2, 135.0)

        assert session.remove_position(3).ok
        assert session.state.get_position(3) is None
        assert len(session.state.ledger) == 3


class TestPriceRefresh:
    """
    **Feature: portfolio-ledger, Property 17: Partial Refresh Failure**

    *For any* batch of quotes, a failed fetch keeps the old price and never
    blocks updates for the other positions.
    """

    def test_failed_fetch_keeps_last_price(self):
        state = PortfolioState(positions=[
            p for p in demo_state().positions if p.ticker in {"AAPL", "MSFT", "USD-CASH", "EUR-CASH"}
        ])
        session = PortfolioSession(state)
        port = FlakyQuotes(failing={"MSFT"}, prices={"AAPL": 200.0})

        asyncio.run(session.apply_price_refresh(port))

        assert sorted(port.requested) == ["AAPL", "MSFT"]
        assert session.state.find_position("AAPL").current_price == 200.0
        assert session.state.find_position("MSFT").current_price == 378.85
        assert session.state.find_position("EUR-CASH").current_price == 1.09
        assert session.state.ledger == state.ledger

    def test_all_failures_change_nothing(self):
        state = demo_state()
        session = PortfolioSession(state)
        failing = {p.ticker for p in state.positions}

        asyncio.run(session.apply_price_refresh(FlakyQuotes(failing=failing, prices={})))

        assert session.state.positions == state.positions
