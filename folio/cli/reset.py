"""Reset command for folio CLI."""

import click
from rich.panel import Panel

from folio.cli.common import console, get_config, get_store, save_session
from folio.db.store import PortfolioStoreError
from folio.demo import demo_state
from folio.models import PortfolioState
from folio.session import PortfolioSession


@click.command()
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt.")
@click.option("--empty", is_flag=True, help="Start from an empty portfolio instead of the demo.")
def reset(confirm: bool, empty: bool) -> None:
    """Discard all positions and ledger records.

    Also recovers from an unreadable portfolio file.

    \b
    Examples:
      folio reset            # Reset to the demo portfolio
      folio reset --empty    # Reset to an empty portfolio
    """
    config = get_config()
    store = get_store(config)

    console.print("[bold cyan]Portfolio Reset[/bold cyan]\n")
    try:
        current = store.load()
    except PortfolioStoreError as e:
        console.print(f"Snapshot:       [red]unreadable[/red] [dim]({e})[/dim]\n")
    else:
        positions = len(current.positions) if current else 0
        records = len(current.ledger) if current else 0
        console.print(f"Positions:      [yellow]{positions}[/yellow]")
        console.print(f"Ledger records: [yellow]{records}[/yellow]\n")

    if not confirm:
        if not click.confirm("Are you sure you want to reset the portfolio?"):
            console.print("[dim]Reset cancelled.[/dim]")
            return

    store.delete()
    session = PortfolioSession(PortfolioState() if empty else demo_state())
    save_session(config, session)

    console.print(Panel(
        f"[green]Portfolio has been reset![/green]\n\n"
        f"Positions: {len(session.state.positions)}",
        title="[bold green]Reset Complete[/bold green]",
        border_style="green",
    ))
