"""Cash deposits."""

import logging
from datetime import date
from typing import Callable

from folio.engine.currency import usd_rate
from folio.engine.ids import IdGenerator
from folio.models import (
    ActionResult,
    DepositCommand,
    PortfolioState,
    Position,
    RejectionReason,
    TradeRecord,
)

logger = logging.getLogger(__name__)

CURRENCY_NAMES = {
    "USD": "US Dollar",
    "EUR": "Euro",
    "PLN": "Polish Zloty",
    "RUB": "Russian Ruble",
}


def cash_ticker(currency: str) -> str:
    """Ticker of the cash position for a currency (EUR -> EUR-CASH)."""
    return f"{currency.upper()}-CASH"


def apply_deposit(
    portfolio: PortfolioState,
    command: DepositCommand,
    ids: IdGenerator,
    today: Callable[[], date] = date.today,
) -> tuple[PortfolioState, ActionResult]:
    """Credit cash in one currency.

    An existing `<CUR>-CASH` position is topped up; otherwise one is
    created priced at the currency's USD rate. The ledger record carries
    the USD value of the deposit.

    Args:
        portfolio: Current portfolio state.
        command: Currency and amount to deposit.
        ids: Identity generator.
        today: Clock for the ledger date.

    Returns:
        Tuple of (new state, result).
    """
    if command.amount is None or command.amount <= 0:
        logger.info("Rejected deposit of %s %s", command.amount, command.currency)
        return portfolio, ActionResult.rejected(
            RejectionReason.VALIDATION_ERROR, "Please enter a valid amount"
        )

    currency = command.currency.upper()
    ticker = cash_ticker(currency)
    rate = usd_rate(currency)
    amount = command.amount

    positions = list(portfolio.positions)
    index = next((i for i, p in enumerate(positions) if p.ticker == ticker), None)

    if index is not None:
        cash = positions[index]
        positions[index] = cash.model_copy(update={"quantity": cash.quantity + amount})
    else:
        positions.append(
            Position(
                id=ids.next_id(),
                ticker=ticker,
                name=f"{CURRENCY_NAMES.get(currency, currency)} Cash",
                asset_class="cash",
                quantity=amount,
                current_price=rate,
                average_cost=rate,
                base_currency=currency,
            )
        )

    record = TradeRecord(
        id=ids.next_id(),
        kind="deposit",
        ticker=ticker,
        quantity=amount,
        price=rate,
        trade_date=today(),
        trade_value=amount * rate,
    )
    logger.info("Deposited %.2f %s", amount, currency)
    return (
        PortfolioState(positions=positions, ledger=[*portfolio.ledger, record]),
        ActionResult.applied(f"Deposited {amount:,.2f} {currency}"),
    )
