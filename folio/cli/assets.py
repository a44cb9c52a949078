"""Asset management commands for folio CLI.

Handles manual entry of holdings, corrections and removal. None of
these move cash.
"""

import asyncio
from datetime import date, datetime
from typing import Optional

import click

from folio.cli.common import (
    console,
    get_config,
    get_quote_port,
    load_session,
    report_result,
    save_session,
)
from folio.engine.trade import resolve_asset_class
from folio.models import ASSET_CLASSES, EditCommand, OnboardCommand
from folio.quotes import QuoteUnavailableError


def _lookup_asset(symbol: str):
    port = get_quote_port(get_config())
    try:
        matches = asyncio.run(port.search_symbols(symbol))
    except QuoteUnavailableError:
        return None
    return next((m for m in matches if m.ticker.upper() == symbol.upper()), None)


@click.command()
@click.argument("symbol")
@click.argument("qty", type=float)
@click.argument("price", type=float)
@click.option("-n", "--name", default=None, help="Display name. Looked up if omitted.")
@click.option(
    "-k", "--asset-class",
    type=click.Choice(ASSET_CLASSES),
    default=None,
    help="Asset class. Looked up if omitted, else equity.",
)
@click.option(
    "-d", "--date",
    "acquired",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Acquisition date (YYYY-MM-DD). Defaults to today.",
)
@click.option("-c", "--currency", default="USD", show_default=True, help="Price currency.")
def add(
    symbol: str,
    qty: float,
    price: float,
    name: Optional[str],
    asset_class: Optional[str],
    acquired: Optional[datetime],
    currency: str,
) -> None:
    """Add a holding bought elsewhere, without touching cash.

    Always creates a new position, even if SYMBOL is already held.

    \b
    Examples:
      folio add VTI 20 240.85
      folio add CDR 10 120 --name "CD Projekt" --currency PLN --date 2023-06-01
    """
    config = get_config()
    session = load_session(config)

    if name is None or asset_class is None:
        asset = _lookup_asset(symbol)
        if asset is not None:
            name = name or asset.name
            asset_class = asset_class or resolve_asset_class(asset.type)
    asset_class = asset_class or "equity"

    command = OnboardCommand(
        ticker=symbol,
        name=name,
        asset_class=asset_class,
        quantity=qty,
        price=price,
        trade_date=acquired.date() if acquired else date.today(),
        currency=currency.upper(),
    )
    result = session.apply_onboard(command)
    if result.ok:
        save_session(config, session)
    report_result(result, "Asset Added")


@click.command()
@click.argument("position_id", type=int)
@click.argument("qty", type=float)
@click.argument("price", type=float)
def edit(position_id: int, qty: float, price: float) -> None:
    """Correct the quantity and price of a position.

    POSITION_ID is shown by `folio positions`. Average cost is kept and
    no ledger record is written.

    \b
    Examples:
      folio edit 3 55 141.20
    """
    config = get_config()
    session = load_session(config)

    result = session.apply_edit(EditCommand(position_id=position_id, quantity=qty, price=price))
    if result.ok:
        save_session(config, session)
    report_result(result, "Position Updated")


@click.command()
@click.argument("position_id", type=int)
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
def remove(position_id: int, confirm: bool) -> None:
    """Remove a position without selling it.

    \b
    Examples:
      folio remove 7
      folio remove 7 --confirm
    """
    config = get_config()
    session = load_session(config)

    position = session.state.get_position(position_id)
    if position is None:
        console.print(f"[dim]No position with id {position_id}.[/dim]")
        return

    if not confirm:
        if not click.confirm(f"Remove {position.ticker} ({position.name})?"):
            console.print("[dim]Removal cancelled.[/dim]")
            return

    result = session.remove_position(position_id)
    if result.ok:
        save_session(config, session)
    report_result(result, "Position Removed")
