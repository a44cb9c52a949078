"""Shared helpers for folio CLI commands."""

import click
from rich.console import Console
from rich.panel import Panel

from folio.config import AppConfig, build_quote_port, load_config
from folio.db.store import PortfolioStore, PortfolioStoreError
from folio.demo import demo_state
from folio.models import ActionResult
from folio.session import PortfolioSession

console = Console()


def get_config() -> AppConfig:
    """Get the configuration loaded by the root command, or load it."""
    ctx = click.get_current_context(silent=True)
    if ctx is not None:
        obj = ctx.find_object(dict)
        if obj is not None and "config" in obj:
            return obj["config"]
    return load_config()


def get_store(config: AppConfig) -> PortfolioStore:
    return PortfolioStore(config.portfolio_path())


def error_panel(message: str) -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def load_session(config: AppConfig) -> PortfolioSession:
    """Open a session on the saved portfolio.

    A fresh installation starts from the demo portfolio when
    `seed_demo` is enabled, otherwise from an empty one.
    """
    try:
        state = get_store(config).load()
    except PortfolioStoreError as e:
        error_panel(str(e))
        raise SystemExit(1)

    if state is None and config.portfolio.seed_demo:
        state = demo_state()
    return PortfolioSession(state)


def save_session(config: AppConfig, session: PortfolioSession) -> None:
    get_store(config).save(session.state)


def get_quote_port(config: AppConfig):
    return build_quote_port(config.quotes)


def report_result(result: ActionResult, title: str) -> None:
    """Print the outcome of a command; exit with status 1 on rejection."""
    if result.status == "APPLIED":
        console.print(Panel(
            f"[green]{result.message}[/green]",
            title=f"[bold green]{title}[/bold green]",
            border_style="green",
        ))
    elif result.status == "IGNORED":
        console.print("[dim]Nothing changed.[/dim]")
    else:
        error_panel(result.message)
        raise SystemExit(1)


def money(value: float) -> str:
    return f"${value:,.2f}"


def signed(value: float, text: str) -> str:
    """Color `text` green for non-negative values, red otherwise."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else ""
    return f"[{color}]{sign}{text}[/{color}]"
