"""Portfolio commands for folio CLI.

Handles valuation, allocation, positions, cash and ledger display.
"""

import click
from rich.panel import Panel
from rich.table import Table

from folio.cli.common import console, get_config, load_session, money, signed
from folio.engine.currency import to_usd
from folio.engine.validator import format_quantity
from folio.engine.valuation import position_cost_usd, position_value_usd


@click.command()
def summary() -> None:
    """Display portfolio value, unrealized gain and allocation.

    \b
    Examples:
      folio summary
    """
    session = load_session(get_config())
    valuation = session.valuation()
    cash = session.liquidity()

    gain_text = signed(
        valuation.unrealized_gain,
        f"{money(abs(valuation.unrealized_gain))} "
        f"({valuation.unrealized_gain_percent:.2f}%)",
    )
    summary_text = (
        f"[bold]Portfolio Summary[/bold]\n\n"
        f"Total Value:      {money(valuation.total_value)}\n"
        f"Total Cost:       {money(valuation.total_cost)}\n"
        f"Liquidity:        {money(cash.total_usd)}\n"
        f"{'─' * 35}\n"
        f"Unrealized Gain:  {gain_text}"
    )
    console.print(Panel(summary_text, title="[bold]Account[/bold]", border_style="cyan"))

    if not valuation.allocation:
        console.print("\n[dim]No positions.[/dim]")
        return

    table = Table(title="Allocation", show_header=True, header_style="bold")
    table.add_column("Category", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Share", justify="right")

    for entry in valuation.allocation:
        table.add_row(
            f"[{entry.color}]■[/{entry.color}] {entry.category}",
            money(entry.market_value),
            f"{entry.percentage:.1f}%",
        )

    console.print()
    console.print(table)


@click.command()
def positions() -> None:
    """Display all positions with their gain in USD.

    \b
    Examples:
      folio positions
    """
    session = load_session(get_config())

    if not session.state.positions:
        console.print("[dim]No positions.[/dim]")
        return

    table = Table(title="Positions", show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Ticker", style="bold")
    table.add_column("Name")
    table.add_column("Class")
    table.add_column("Qty", justify="right")
    table.add_column("Avg Cost", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value (USD)", justify="right")
    table.add_column("Gain (USD)", justify="right")

    for pos in session.state.positions:
        value = position_value_usd(pos)
        gain = value - position_cost_usd(pos)
        table.add_row(
            str(pos.id),
            pos.ticker,
            pos.name,
            pos.asset_class,
            format_quantity(pos.quantity),
            f"{pos.average_cost:,.2f} {pos.base_currency}",
            f"{pos.current_price:,.2f} {pos.base_currency}",
            money(value),
            signed(gain, money(abs(gain))),
        )

    console.print(table)


@click.command()
def cash() -> None:
    """Display cash balances per currency and total liquidity.

    \b
    Examples:
      folio cash
    """
    session = load_session(get_config())
    liquidity = session.liquidity()

    table = Table(title="Cash", show_header=True, header_style="bold")
    table.add_column("Ticker", style="bold")
    table.add_column("Amount", justify="right")
    table.add_column("USD", justify="right")

    for pos in liquidity.cash_positions:
        table.add_row(
            pos.ticker,
            f"{pos.quantity:,.2f} {pos.base_currency}",
            money(to_usd(pos.quantity, pos.base_currency)),
        )

    console.print(table)
    console.print(f"\nTotal Liquidity: [bold]{money(liquidity.total_usd)}[/bold]")


@click.command()
@click.option(
    "-n", "--limit",
    type=int,
    default=None,
    help="Show only the most recent N records.",
)
def history(limit: int | None) -> None:
    """Display the trade ledger, newest first.

    \b
    Examples:
      folio history
      folio history -n 5
    """
    session = load_session(get_config())
    records = session.history()
    if limit is not None:
        records = records[:limit]

    if not records:
        console.print("[dim]No ledger records.[/dim]")
        return

    kind_styles = {"buy": "green", "sell": "red", "deposit": "cyan", "add": "yellow"}

    table = Table(title="Ledger", show_header=True, header_style="bold")
    table.add_column("Date")
    table.add_column("Action", justify="center")
    table.add_column("Ticker", style="bold")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")

    for record in records:
        style = kind_styles.get(record.kind, "white")
        table.add_row(
            record.trade_date.isoformat(),
            f"[{style}]{record.kind.upper()}[/{style}]",
            record.ticker,
            format_quantity(record.quantity),
            f"{record.price:,.2f}",
            f"{record.trade_value:,.2f}",
        )

    console.print(table)
