"""Manual entry of holdings acquired outside the ledger."""

import logging

from folio.engine.ids import IdGenerator
from folio.engine.trade import resolve_asset_class
from folio.models import (
    ActionResult,
    OnboardCommand,
    PortfolioState,
    Position,
    RejectionReason,
    TradeRecord,
)

logger = logging.getLogger(__name__)


def apply_onboard(
    portfolio: PortfolioState,
    command: OnboardCommand,
    ids: IdGenerator,
) -> tuple[PortfolioState, ActionResult]:
    """Add a brand-new position with an `add` ledger record.

    Unlike a buy this never merges into an existing position with the
    same ticker and moves no cash.

    Args:
        portfolio: Current portfolio state.
        command: Holding details; every field is required.
        ids: Identity generator.

    Returns:
        Tuple of (new state, result).
    """
    required = (
        command.ticker,
        command.name,
        command.asset_class,
        command.quantity,
        command.price,
        command.trade_date,
        command.currency,
    )
    if any(value is None or value == "" for value in required):
        return portfolio, ActionResult.rejected(
            RejectionReason.VALIDATION_ERROR, "All fields are required"
        )

    if command.quantity <= 0 or command.price <= 0:
        return portfolio, ActionResult.rejected(
            RejectionReason.VALIDATION_ERROR, "Quantity and price must be positive"
        )

    ticker = command.ticker.upper()
    position = Position(
        id=ids.next_id(),
        ticker=ticker,
        name=command.name,
        asset_class=resolve_asset_class(command.asset_class),
        quantity=command.quantity,
        current_price=command.price,
        average_cost=command.price,
        base_currency=command.currency.upper(),
    )
    record = TradeRecord(
        id=ids.next_id(),
        kind="add",
        ticker=ticker,
        quantity=command.quantity,
        price=command.price,
        trade_date=command.trade_date,
        trade_value=command.quantity * command.price,
    )

    logger.info("Added %s (%s)", ticker, position.asset_class)
    return (
        PortfolioState(
            positions=[*portfolio.positions, position],
            ledger=[*portfolio.ledger, record],
        ),
        ActionResult.applied(f"Added {ticker}"),
    )
