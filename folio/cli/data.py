"""Market data commands for folio CLI.

Handles quotes, symbol search, price refresh and the market overview.
"""

import asyncio

import click
from rich.panel import Panel
from rich.table import Table

from folio.cli.common import (
    console,
    error_panel,
    get_config,
    get_quote_port,
    load_session,
    save_session,
    signed,
)
from folio.models import MarketSnapshot
from folio.quotes import QuoteUnavailableError, SearchDebouncer, watch_market


@click.command()
@click.argument("symbol")
def quote(symbol: str) -> None:
    """Show the latest quote for SYMBOL.

    \b
    Examples:
      folio quote AAPL
      folio quote BTC-USD
    """
    port = get_quote_port(get_config())
    try:
        q = asyncio.run(port.fetch_quote(symbol))
    except QuoteUnavailableError as e:
        error_panel(f"Quote unavailable: {e}")
        raise SystemExit(1)

    console.print(Panel(
        f"[bold]{q.name}[/bold]\n\n"
        f"Price:   {q.price:,.2f} {q.currency}\n"
        f"Change:  {signed(q.change, f'{abs(q.change):,.2f} ({q.change_percent:.2f}%)')}\n"
        f"[dim]{q.timestamp:%Y-%m-%d %H:%M:%S}[/dim]",
        title=f"[bold cyan]{q.symbol}[/bold cyan]",
        border_style="cyan",
    ))


async def _search(port, query: str, delay: float, min_chars: int):
    debouncer = SearchDebouncer(port, delay=delay, min_chars=min_chars)
    debouncer.schedule_search(query)
    await debouncer.wait()
    return debouncer.results


@click.command()
@click.argument("query")
def search(query: str) -> None:
    """Search instruments by symbol or name.

    \b
    Examples:
      folio search apple
      folio search ETH
    """
    config = get_config()
    port = get_quote_port(config)
    results = asyncio.run(_search(
        port,
        query,
        config.search.debounce_ms / 1000,
        config.search.min_chars,
    ))

    if not results:
        console.print(f"[dim]No matches for '{query}'.[/dim]")
        return

    table = Table(title=f"Results for '{query}'", show_header=True, header_style="bold")
    table.add_column("Ticker", style="bold")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Exchange")
    for result in results:
        table.add_row(result.ticker, result.name, result.type, result.exchange)
    console.print(table)


@click.command()
def refresh() -> None:
    """Requote every non-cash position.

    Positions whose quote fails keep their last price.

    \b
    Examples:
      folio refresh
    """
    config = get_config()
    session = load_session(config)
    before = {p.id: p.current_price for p in session.state.positions}

    with console.status("[cyan]Refreshing prices...[/cyan]"):
        asyncio.run(session.apply_price_refresh(get_quote_port(config)))
    save_session(config, session)

    table = Table(title="Price Refresh", show_header=True, header_style="bold")
    table.add_column("Ticker", style="bold")
    table.add_column("Old", justify="right")
    table.add_column("New", justify="right")
    for pos in session.state.positions:
        if pos.is_cash:
            continue
        old = before.get(pos.id, pos.current_price)
        table.add_row(
            pos.ticker,
            f"{old:,.2f}",
            signed(pos.current_price - old, f"{pos.current_price:,.2f}"),
        )
    console.print(table)


def _print_snapshot(snapshot: MarketSnapshot) -> None:
    status_color = "green" if snapshot.status == "OPEN" else "red"
    table = Table(
        title=f"Market [{status_color}]{snapshot.status}[/{status_color}]",
        caption=f"as of {snapshot.as_of:%Y-%m-%d %H:%M:%S}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Index", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")

    labels = {"sp500": "S&P 500", "nasdaq": "NASDAQ", "dow": "Dow Jones"}
    for key, label in labels.items():
        index = getattr(snapshot.indices, key)
        table.add_row(
            label,
            f"{index.value:,.2f}",
            signed(index.change, f"{abs(index.change):,.2f} ({index.change_percent:.2f}%)"),
        )
    console.print(table)


@click.command()
@click.option("-w", "--watch", is_flag=True, help="Keep polling until interrupted.")
def market(watch: bool) -> None:
    """Show the S&P 500, NASDAQ and Dow Jones.

    \b
    Examples:
      folio market
      folio market --watch
    """
    config = get_config()
    port = get_quote_port(config)

    try:
        asyncio.run(watch_market(
            port,
            _print_snapshot,
            interval=config.market.poll_seconds,
            iterations=None if watch else 1,
        ))
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")
