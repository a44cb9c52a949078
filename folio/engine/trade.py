"""Buy/sell execution against the portfolio state.

The executor is a small state machine:

    IDLE -> VALIDATING -> REJECTED -> IDLE
    IDLE -> VALIDATING -> APPLYING -> IDLE

Every call to `execute` runs one full cycle. A rejected trade leaves the
positions and the ledger untouched; an applied trade returns a new state
with the position updated, USD cash settled and one ledger record
appended. Executing the same command twice trades twice.
"""

import logging
from datetime import date
from enum import Enum
from typing import Callable, Optional

from folio.engine.ids import IdGenerator
from folio.engine.liquidity import liquidity
from folio.engine.validator import can_afford, can_sell, format_quantity
from folio.models import (
    ASSET_CLASSES,
    ActionResult,
    PortfolioState,
    Position,
    RejectionReason,
    SearchResult,
    TradeCommand,
    TradeRecord,
)

logger = logging.getLogger(__name__)

USD_CASH = "USD-CASH"


class ExecutorState(str, Enum):
    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    REJECTED = "REJECTED"
    APPLYING = "APPLYING"


def resolve_asset_class(instrument_type: Optional[str]) -> str:
    """Map a search result type onto an asset class.

    ETFs are held as equities; anything unrecognised defaults to equity.
    """
    kind = (instrument_type or "").lower()
    if kind in ASSET_CLASSES:
        return kind
    if kind == "crypto":
        return "cryptocurrency"
    return "equity"


def usd_cash_position(position_id: int, quantity: float) -> Position:
    return Position(
        id=position_id,
        ticker=USD_CASH,
        name="US Dollar Cash",
        asset_class="cash",
        quantity=quantity,
        current_price=1.0,
        average_cost=1.0,
        base_currency="USD",
    )


class TradeExecutor:
    """Validates and applies buy/sell commands.

    `transitions` holds the states visited by the most recent `execute`.

    Args:
        ids: Identity generator shared with the owning session.
        today: Clock used for ledger trade dates.
    """

    def __init__(self, ids: IdGenerator, today: Callable[[], date] = date.today):
        self._ids = ids
        self._today = today
        self.state = ExecutorState.IDLE
        self.last_error = ""
        self.transitions: list[ExecutorState] = [ExecutorState.IDLE]

    def _enter(self, state: ExecutorState) -> None:
        self.state = state
        self.transitions.append(state)

    def execute(
        self,
        portfolio: PortfolioState,
        command: TradeCommand,
    ) -> tuple[PortfolioState, ActionResult]:
        """Run one trade through validation and, if accepted, application.

        Args:
            portfolio: Current portfolio state.
            command: Trade to execute.

        Returns:
            Tuple of (new state, result). On rejection the input state is
            returned unchanged.
        """
        self.transitions = [self.state]
        self._enter(ExecutorState.VALIDATING)
        rejection = self._validate(portfolio, command)

        if rejection is not None:
            self._enter(ExecutorState.REJECTED)
            self.last_error = rejection.message
            logger.info(
                "Rejected %s %s: %s", command.action, command.ticker, rejection.message
            )
            self._enter(ExecutorState.IDLE)
            return portfolio, rejection

        self._enter(ExecutorState.APPLYING)
        new_state = self._apply(portfolio, command)
        self.last_error = ""
        self._enter(ExecutorState.IDLE)

        ticker = command.ticker.upper()
        logger.info(
            "Applied %s %s x %s @ %.2f",
            command.action,
            ticker,
            format_quantity(command.quantity),
            command.price,
        )
        return new_state, ActionResult.applied(
            f"{command.action.upper()} {format_quantity(command.quantity)} {ticker} "
            f"@ ${command.price:,.2f}"
        )

    def _validate(
        self,
        portfolio: PortfolioState,
        command: TradeCommand,
    ) -> Optional[ActionResult]:
        if not command.ticker or command.quantity is None or command.price is None:
            return ActionResult.rejected(
                RejectionReason.VALIDATION_ERROR, "All fields are required"
            )

        if command.quantity <= 0 or command.price <= 0:
            return ActionResult.rejected(
                RejectionReason.VALIDATION_ERROR, "Quantity and price must be positive"
            )

        if command.action == "buy":
            available = liquidity(portfolio.positions).total_usd
            required = command.quantity * command.price
            if not can_afford(command.quantity, command.price, available):
                return ActionResult.rejected(
                    RejectionReason.INSUFFICIENT_FUNDS,
                    f"Insufficient funds. Available: ${available:,.2f}, "
                    f"Required: ${required:,.2f}",
                )
        else:
            check = can_sell(command.ticker, command.quantity, portfolio.positions)
            if check.reason == RejectionReason.NOT_OWNED:
                return ActionResult.rejected(check.reason, "You do not own this asset")
            if not check.ok:
                return ActionResult.rejected(
                    check.reason,
                    f"You only own {format_quantity(check.held)} shares",
                )

        return None

    def _apply(self, portfolio: PortfolioState, command: TradeCommand) -> PortfolioState:
        ticker = command.ticker
        quantity = command.quantity
        price = command.price
        is_buy = command.action == "buy"

        positions = list(portfolio.positions)
        index = next(
            (i for i, p in enumerate(positions) if p.ticker.lower() == ticker.lower()),
            None,
        )

        if index is not None:
            existing = positions[index]
            if is_buy:
                new_quantity = existing.quantity + quantity
            else:
                new_quantity = existing.quantity - quantity

            if new_quantity <= 0:
                # Position closed
                del positions[index]
            else:
                if is_buy:
                    new_average = (
                        existing.quantity * existing.average_cost + quantity * price
                    ) / new_quantity
                else:
                    new_average = existing.average_cost
                positions[index] = existing.model_copy(
                    update={
                        "quantity": new_quantity,
                        "average_cost": new_average,
                        "current_price": price,
                    }
                )
        elif is_buy:
            positions.append(self._new_position(ticker, quantity, price, command.asset))

        positions = self._settle_cash(positions, quantity * price, is_buy)

        record = TradeRecord(
            id=self._ids.next_id(),
            kind=command.action,
            ticker=ticker.upper(),
            quantity=quantity,
            price=price,
            trade_date=self._today(),
            trade_value=quantity * price,
        )
        return PortfolioState(positions=positions, ledger=[*portfolio.ledger, record])

    def _new_position(
        self,
        ticker: str,
        quantity: float,
        price: float,
        asset: Optional[SearchResult],
    ) -> Position:
        symbol = ticker.upper()
        return Position(
            id=self._ids.next_id(),
            ticker=symbol,
            name=asset.name if asset and asset.name else f"{symbol} Holdings",
            asset_class=resolve_asset_class(asset.type if asset else None),
            quantity=quantity,
            current_price=price,
            average_cost=price,
            base_currency="USD",
        )

    def _settle_cash(
        self,
        positions: list[Position],
        value: float,
        is_buy: bool,
    ) -> list[Position]:
        """Debit or credit USD cash by the trade value."""
        index = next((i for i, p in enumerate(positions) if p.ticker == USD_CASH), None)

        if is_buy:
            if index is None:
                logger.warning("No %s position to debit %.2f from", USD_CASH, value)
                return positions
            cash = positions[index]
            positions[index] = cash.model_copy(update={"quantity": cash.quantity - value})
        elif index is not None:
            cash = positions[index]
            positions[index] = cash.model_copy(update={"quantity": cash.quantity + value})
        else:
            positions.append(usd_cash_position(self._ids.next_id(), value))

        return positions
