"""Out-of-band position corrections.

Neither operation here touches cash or writes to the ledger.
"""

import logging

from folio.models import ActionResult, EditCommand, PortfolioState

logger = logging.getLogger(__name__)


def apply_edit(
    portfolio: PortfolioState,
    command: EditCommand,
) -> tuple[PortfolioState, ActionResult]:
    """Overwrite quantity and current price of a position.

    Non-positive or missing values, or an unknown id, leave the state
    unchanged and yield an IGNORED result.
    """
    quantity, price = command.quantity, command.price
    if quantity is None or price is None or quantity <= 0 or price <= 0:
        return portfolio, ActionResult.ignored()

    if portfolio.get_position(command.position_id) is None:
        return portfolio, ActionResult.ignored()

    positions = [
        p.model_copy(update={"quantity": quantity, "current_price": price})
        if p.id == command.position_id
        else p
        for p in portfolio.positions
    ]
    logger.info("Edited position %d", command.position_id)
    return (
        PortfolioState(positions=positions, ledger=portfolio.ledger),
        ActionResult.applied("Position updated"),
    )


def remove_position(
    portfolio: PortfolioState,
    position_id: int,
) -> tuple[PortfolioState, ActionResult]:
    """Delete a position outright."""
    if portfolio.get_position(position_id) is None:
        return portfolio, ActionResult.ignored()

    positions = [p for p in portfolio.positions if p.id != position_id]
    logger.info("Removed position %d", position_id)
    return (
        PortfolioState(positions=positions, ledger=portfolio.ledger),
        ActionResult.applied("Position removed"),
    )
