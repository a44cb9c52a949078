"""Property-based tests for trade validation and execution.

**Feature: portfolio-ledger**
"""

from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from folio.engine.ids import SequentialIdGenerator
from folio.engine.trade import ExecutorState, TradeExecutor, resolve_asset_class
from folio.engine.validator import can_afford, can_sell, describe_sell
from folio.models import (
    PortfolioState,
    Position,
    RejectionReason,
    SearchResult,
    TradeCommand,
)

TODAY = date(2024, 3, 15)


def make_position(id, ticker, asset_class, quantity, price, cost=None, currency="USD"):
    return Position(
        id=id,
        ticker=ticker,
        name=f"{ticker} Holdings",
        asset_class=asset_class,
        quantity=quantity,
        current_price=price,
        average_cost=price if cost is None else cost,
        base_currency=currency,
    )


def usd_cash(quantity, id=100):
    return make_position(id, "USD-CASH", "cash", quantity, 1.0)


def make_executor(start: int = 1000) -> TradeExecutor:
    return TradeExecutor(SequentialIdGenerator(start), today=lambda: TODAY)


def buy(ticker, quantity, price, asset=None):
    return TradeCommand(action="buy", ticker=ticker, quantity=quantity, price=price, asset=asset)


def sell(ticker, quantity, price):
    return TradeCommand(action="sell", ticker=ticker, quantity=quantity, price=price)


class TestTradeValidator:
    """
    **Feature: portfolio-ledger, Property 5: Affordability and Holdings Checks**
    """

    @given(
        quantity=st.integers(min_value=1, max_value=10_000),
        price=st.integers(min_value=1, max_value=10_000),
    )
    @settings(max_examples=100)
    def test_exact_cost_is_affordable(self, quantity: int, price: int):
        cost = quantity * price
        assert can_afford(quantity, price, cost)
        assert not can_afford(quantity, price, cost - 1)

    def test_can_sell_reasons(self):
        positions = [make_position(1, "MSFT", "equity", 10, 400.0)]

        assert can_sell("msft", 10, positions).ok
        assert can_sell("MSFT", 4, positions).held == 10

        missing = can_sell("AAPL", 1, positions)
        assert not missing.ok
        assert missing.reason == RejectionReason.NOT_OWNED

        too_many = can_sell("MSFT", 11, positions)
        assert not too_many.ok
        assert too_many.reason == RejectionReason.INSUFFICIENT_HOLDINGS
        assert too_many.held == 10

    def test_describe_sell(self):
        positions = [make_position(1, "MSFT", "equity", 10, 400.0)]

        assert describe_sell("MSFT", None, positions) == ""
        assert describe_sell("", 3, positions) == ""
        assert describe_sell("MSFT", 0, positions) == ""
        assert describe_sell("AAPL", 1, positions) == "You do not own this asset"
        assert describe_sell("MSFT", 12, positions) == "You only own 10 shares (trying to sell 12)"
        assert describe_sell("msft", 10, positions) == "This will sell all your shares in this asset"
        assert describe_sell("MSFT", 2.5, positions) == "You will have 7.50 shares remaining"


class TestWeightedAverageCost:
    """
    **Feature: portfolio-ledger, Property 6: Weighted-Average Cost**

    *For any* two buys q1@p1 and q2@p2 of a new ticker, the average cost
    equals (q1*p1 + q2*p2) / (q1 + q2) exactly.
    """

    @given(
        q1=st.floats(min_value=0.001, max_value=1e4, allow_nan=False, allow_infinity=False),
        p1=st.floats(min_value=0.01, max_value=1e4, allow_nan=False, allow_infinity=False),
        q2=st.floats(min_value=0.001, max_value=1e4, allow_nan=False, allow_infinity=False),
        p2=st.floats(min_value=0.01, max_value=1e4, allow_nan=False, allow_infinity=False),
    )
    @settings(max_examples=200)
    def test_two_buys(self, q1: float, p1: float, q2: float, p2: float):
        executor = make_executor()
        state = PortfolioState(positions=[usd_cash(1e12)])

        state, first = executor.execute(state, buy("XYZ", q1, p1))
        state, second = executor.execute(state, buy("XYZ", q2, p2))

        assert first.ok and second.ok
        position = state.find_position("XYZ")
        assert position.quantity == q1 + q2
        assert position.average_cost == (q1 * p1 + q2 * p2) / (q1 + q2)
        assert position.current_price == p2


class TestBuySellRoundTrip:
    """
    **Feature: portfolio-ledger, Property 7: Buy-Then-Sell Round Trip**

    *For any* quantity and price, buying then selling the same amount of
    a new ticker restores the positions and grows the ledger by two.
    """

    @given(
        quantity=st.integers(min_value=1, max_value=1000),
        price=st.integers(min_value=1, max_value=1000),
    )
    @settings(max_examples=100)
    def test_round_trip_restores_positions(self, quantity: int, price: int):
        executor = make_executor()
        before = PortfolioState(
            positions=[make_position(1, "AAPL", "equity", 10, 185.0), usd_cash(5_000_000.0)]
        )

        state, _ = executor.execute(before, buy("NEW", quantity, price))
        state, _ = executor.execute(state, sell("NEW", quantity, price))

        assert state.positions == before.positions
        assert len(state.ledger) == len(before.ledger) + 2
        assert [r.kind for r in state.ledger] == ["buy", "sell"]


class TestSellRules:
    """
    **Feature: portfolio-ledger, Property 8: Sell Removal and Rejection**
    """

    @given(quantity=st.floats(min_value=0.01, max_value=1e6, allow_nan=False, allow_infinity=False))
    @settings(max_examples=100)
    def test_full_sale_removes_position(self, quantity: float):
        executor = make_executor()
        state = PortfolioState(
            positions=[make_position(1, "ETH", "cryptocurrency", quantity, 3000.0), usd_cash(0)]
        )

        state, result = executor.execute(state, sell("eth", quantity, 3100.0))

        assert result.ok
        assert state.find_position("ETH") is None
        assert state.find_position("USD-CASH").quantity == quantity * 3100.0

    @given(excess=st.floats(min_value=0.01, max_value=100, allow_nan=False, allow_infinity=False))
    @settings(max_examples=50)
    def test_overselling_is_rejected(self, excess: float):
        executor = make_executor()
        before = PortfolioState(
            positions=[make_position(1, "MSFT", "equity", 10, 400.0), usd_cash(100)]
        )

        after, result = executor.execute(before, sell("MSFT", 10 + excess, 400.0))

        assert result.status == "REJECTED"
        assert result.reason == RejectionReason.INSUFFICIENT_HOLDINGS
        assert result.message == "You only own 10 shares"
        assert after is before

    def test_selling_unowned_is_rejected(self):
        executor = make_executor()
        before = PortfolioState(positions=[usd_cash(100)])

        after, result = executor.execute(before, sell("AAPL", 1, 100.0))

        assert result.reason == RejectionReason.NOT_OWNED
        assert result.message == "You do not own this asset"
        assert after is before

    def test_partial_sale_scenario(self):
        """Sell 5 of 10 MSFT: cost kept, price updated, cash credited."""
        executor = make_executor()
        state = PortfolioState(
            positions=[make_position(1, "MSFT", "equity", 10, 378.85, cost=365.0), usd_cash(1000)]
        )

        state, result = executor.execute(state, sell("MSFT", 5, 400.0))

        assert result.ok
        msft = state.find_position("MSFT")
        assert msft.quantity == 5
        assert msft.average_cost == 365.0
        assert msft.current_price == 400.0
        assert state.find_position("USD-CASH").quantity == 1000 + 5 * 400.0

    def test_sale_creates_usd_cash_when_missing(self):
        executor = make_executor(start=50)
        state = PortfolioState(positions=[make_position(1, "BTC", "cryptocurrency", 1, 60000.0)])

        state, result = executor.execute(state, sell("BTC", 0.5, 64000.0))

        assert result.ok
        cash = state.find_position("USD-CASH")
        assert cash.quantity == 32000.0
        assert cash.current_price == 1.0
        assert cash.average_cost == 1.0
        assert cash.asset_class == "cash"
        assert cash.name == "US Dollar Cash"


class TestBuyRules:
    """
    **Feature: portfolio-ledger, Property 9: Buy Funding**
    """

    def test_buy_scenario(self):
        """10 AAPL @150 onto 10 @100 with 5000 USD cash."""
        executor = make_executor()
        state = PortfolioState(
            positions=[make_position(1, "AAPL", "equity", 10, 100.0, cost=100.0), usd_cash(5000)]
        )

        state, result = executor.execute(state, buy("AAPL", 10, 150.0))

        assert result.ok
        aapl = state.find_position("AAPL")
        assert aapl.quantity == 20
        assert aapl.average_cost == 125.0
        assert aapl.current_price == 150.0
        assert state.find_position("USD-CASH").quantity == 3500
        assert len(state.ledger) == 1
        record = state.ledger[0]
        assert record.kind == "buy"
        assert record.ticker == "AAPL"
        assert record.trade_value == 1500
        assert record.trade_date == TODAY

    @given(shortfall=st.floats(min_value=0.01, max_value=1e6, allow_nan=False, allow_infinity=False))
    @settings(max_examples=50)
    def test_insufficient_funds_leaves_state(self, shortfall: float):
        executor = make_executor()
        before = PortfolioState(positions=[usd_cash(1000)])

        after, result = executor.execute(before, buy("AAPL", 1, 1000 + shortfall))

        assert result.status == "REJECTED"
        assert result.reason == RejectionReason.INSUFFICIENT_FUNDS
        assert result.message.startswith("Insufficient funds. Available: $1,000.00, Required: $")
        assert after is before
        assert after.ledger == []

    def test_liquidity_counts_all_currencies(self):
        executor = make_executor()
        state = PortfolioState(
            positions=[
                usd_cash(100),
                make_position(2, "EUR-CASH", "cash", 1000, 1.09, currency="EUR"),
            ]
        )

        state, result = executor.execute(state, buy("AAPL", 1, 1000.0))

        assert result.ok
        # Only USD cash is debited.
        assert state.find_position("USD-CASH").quantity == -900
        assert state.find_position("EUR-CASH").quantity == 1000

    def test_buy_without_usd_cash_skips_debit(self):
        executor = make_executor()
        state = PortfolioState(
            positions=[make_position(2, "EUR-CASH", "cash", 10000, 1.09, currency="EUR")]
        )

        state, result = executor.execute(state, buy("AAPL", 10, 100.0))

        assert result.ok
        assert state.find_position("USD-CASH") is None
        assert state.find_position("EUR-CASH").quantity == 10000

    def test_new_ticker_defaults(self):
        executor = make_executor(start=7)
        state = PortfolioState(positions=[usd_cash(10_000)])

        state, _ = executor.execute(state, buy("abc", 2, 50.0))

        position = state.find_position("ABC")
        assert position.id == 7
        assert position.ticker == "ABC"
        assert position.name == "ABC Holdings"
        assert position.asset_class == "equity"
        assert position.base_currency == "USD"
        assert position.average_cost == position.current_price == 50.0
        assert state.ledger[0].ticker == "ABC"

    def test_new_ticker_uses_search_metadata(self):
        executor = make_executor()
        state = PortfolioState(positions=[usd_cash(1_000_000)])
        asset = SearchResult(ticker="BTC-USD", name="Bitcoin USD", type="cryptocurrency", exchange="CCC")

        state, _ = executor.execute(state, buy("BTC-USD", 1, 67500.0, asset=asset))

        position = state.find_position("BTC-USD")
        assert position.name == "Bitcoin USD"
        assert position.asset_class == "cryptocurrency"

    def test_resolve_asset_class(self):
        assert resolve_asset_class("etf") == "equity"
        assert resolve_asset_class("Cryptocurrency") == "cryptocurrency"
        assert resolve_asset_class("bond") == "bond"
        assert resolve_asset_class("mutualfund") == "equity"
        assert resolve_asset_class(None) == "equity"


class TestTradeCommandValidation:
    """
    **Feature: portfolio-ledger, Property 10: Input Validation**
    """

    @pytest.mark.parametrize(
        "command",
        [
            TradeCommand(action="buy", ticker=None, quantity=1, price=1),
            TradeCommand(action="buy", ticker="", quantity=1, price=1),
            TradeCommand(action="sell", ticker="AAPL", quantity=None, price=1),
            TradeCommand(action="buy", ticker="AAPL", quantity=1, price=None),
        ],
    )
    def test_missing_fields(self, command: TradeCommand):
        before = PortfolioState(positions=[usd_cash(1000)])
        after, result = make_executor().execute(before, command)

        assert result.reason == RejectionReason.VALIDATION_ERROR
        assert result.message == "All fields are required"
        assert after is before

    @pytest.mark.parametrize("quantity,price", [(0, 10), (-1, 10), (1, 0), (1, -5)])
    def test_non_positive_values(self, quantity: float, price: float):
        before = PortfolioState(positions=[usd_cash(1000)])
        after, result = make_executor().execute(before, buy("AAPL", quantity, price))

        assert result.message == "Quantity and price must be positive"
        assert after is before


class TestExecutorStateMachine:
    """
    **Feature: portfolio-ledger, Property 11: Executor Lifecycle**

    Every execution returns the executor to IDLE, passing through
    VALIDATING and either APPLYING or REJECTED.
    """

    def test_applied_path(self):
        executor = make_executor()
        executor.last_error = "stale"
        state = PortfolioState(positions=[usd_cash(1000)])

        executor.execute(state, buy("AAPL", 1, 100.0))

        assert executor.transitions == [
            ExecutorState.IDLE,
            ExecutorState.VALIDATING,
            ExecutorState.APPLYING,
            ExecutorState.IDLE,
        ]
        assert executor.state == ExecutorState.IDLE
        assert executor.last_error == ""

    def test_rejected_path(self):
        executor = make_executor()
        state = PortfolioState(positions=[usd_cash(10)])

        executor.execute(state, buy("AAPL", 1, 100.0))

        assert executor.transitions == [
            ExecutorState.IDLE,
            ExecutorState.VALIDATING,
            ExecutorState.REJECTED,
            ExecutorState.IDLE,
        ]
        assert executor.last_error.startswith("Insufficient funds")

    @given(trades=st.integers(min_value=1, max_value=30))
    @settings(max_examples=20)
    def test_transitions_cover_last_cycle_only(self, trades: int):
        executor = make_executor()
        state = PortfolioState(positions=[usd_cash(1e9)])

        for _ in range(trades):
            state, _ = executor.execute(state, buy("AAPL", 1, 100.0))
        executor.execute(state, buy("AAPL", 0, 100.0))

        assert executor.transitions == [
            ExecutorState.IDLE,
            ExecutorState.VALIDATING,
            ExecutorState.REJECTED,
            ExecutorState.IDLE,
        ]

    def test_resubmission_trades_again(self):
        executor = make_executor()
        state = PortfolioState(positions=[usd_cash(1000)])
        command = buy("AAPL", 1, 100.0)

        state, _ = executor.execute(state, command)
        state, _ = executor.execute(state, command)

        assert state.find_position("AAPL").quantity == 2
        assert state.find_position("USD-CASH").quantity == 800
        assert len(state.ledger) == 2
        assert len({r.id for r in state.ledger}) == 2
