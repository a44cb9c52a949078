"""Trading commands for folio CLI.

Handles buy, sell and cash deposit commands.
"""

import asyncio
from typing import Optional

import click
from rich.panel import Panel

from folio.cli.common import (
    console,
    get_config,
    get_quote_port,
    load_session,
    report_result,
    save_session,
)
from folio.engine.currency import supported_currencies
from folio.engine.validator import describe_sell, format_quantity
from folio.models import DepositCommand, SearchResult, TradeCommand
from folio.quotes import QuotePort, QuoteUnavailableError


async def _resolve(
    port: QuotePort,
    symbol: str,
    need_price: bool,
    need_asset: bool,
) -> tuple[Optional[float], Optional[SearchResult]]:
    """Look up the current price and instrument metadata for a symbol."""
    price = None
    asset = None

    if need_price:
        try:
            price = (await port.fetch_quote(symbol)).price
        except QuoteUnavailableError:
            price = None

    if need_asset:
        try:
            matches = await port.search_symbols(symbol)
        except QuoteUnavailableError:
            matches = []
        asset = next((m for m in matches if m.ticker.upper() == symbol), None)

    return price, asset


def _trade(action: str, symbol: str, qty: float, price: Optional[float]) -> None:
    config = get_config()
    session = load_session(config)
    symbol = symbol.upper()

    is_new = action == "buy" and session.state.find_position(symbol) is None
    asset = None
    if price is None or is_new:
        port = get_quote_port(config)
        quoted, asset = asyncio.run(_resolve(port, symbol, price is None, is_new))
        if price is None:
            price = quoted

    order_info = (
        f"[bold]Order Details[/bold]\n\n"
        f"Ticker:   {symbol}\n"
        f"Side:     {'[green]BUY[/green]' if action == 'buy' else '[red]SELL[/red]'}\n"
        f"Quantity: {format_quantity(qty)}"
    )
    if price is not None:
        order_info += f"\nPrice:    ${price:,.2f}\nValue:    ${qty * price:,.2f}"
    if asset is not None:
        order_info += f"\nName:     {asset.name}"
    if action == "sell":
        hint = describe_sell(symbol, qty, session.state.positions)
        if hint:
            order_info += f"\n\n[dim]{hint}[/dim]"

    console.print(Panel(order_info, title="[bold cyan]Placing Trade[/bold cyan]", border_style="cyan"))

    command = TradeCommand(action=action, ticker=symbol, quantity=qty, price=price, asset=asset)
    result = session.apply_trade(command)
    if result.ok:
        save_session(config, session)
    report_result(result, "Trade Executed")


@click.command()
@click.argument("symbol")
@click.argument("qty", type=float)
@click.option(
    "-p", "--price",
    type=float,
    default=None,
    help="Execution price in USD. If not specified, uses the current quote.",
)
def buy(symbol: str, qty: float, price: Optional[float]) -> None:
    """Buy QTY units of SYMBOL, paid from USD cash.

    \b
    Examples:
      folio buy AAPL 10              # Buy at the current quote
      folio buy MSFT 5 --price 380   # Buy at a given price
    """
    _trade("buy", symbol, qty, price)


@click.command()
@click.argument("symbol")
@click.argument("qty", type=float)
@click.option(
    "-p", "--price",
    type=float,
    default=None,
    help="Execution price in USD. If not specified, uses the current quote.",
)
def sell(symbol: str, qty: float, price: Optional[float]) -> None:
    """Sell QTY units of SYMBOL; proceeds go to USD cash.

    \b
    Examples:
      folio sell AAPL 10
      folio sell BTC 0.1 --price 68000
    """
    _trade("sell", symbol, qty, price)


@click.command()
@click.argument("amount", type=float)
@click.option(
    "-c", "--currency",
    type=click.Choice(supported_currencies(), case_sensitive=False),
    default="USD",
    show_default=True,
    help="Currency of the deposit.",
)
def deposit(amount: float, currency: str) -> None:
    """Deposit AMOUNT of cash in a currency.

    \b
    Examples:
      folio deposit 5000
      folio deposit 1000 -c EUR
    """
    config = get_config()
    session = load_session(config)

    result = session.apply_deposit(DepositCommand(currency=currency.upper(), amount=amount))
    if result.ok:
        save_session(config, session)
    report_result(result, "Deposit Complete")
