"""folio command-line entry point.

Subcommands live in the `folio.cli.*` modules and are imported on first
use.
"""

import importlib

import click


class LazyGroup(click.Group):
    """Group that resolves `name -> module` entries on demand.

    Each module must define a command function named after its command.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(self._lazy_subcommands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self._lazy_subcommands:
            return None
        module = importlib.import_module(self._lazy_subcommands[cmd_name])
        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"{module.__name__} has no command '{cmd_name}'")
        return cmd


# command name -> defining module
LAZY_SUBCOMMANDS = {
    "summary": "folio.cli.portfolio",
    "positions": "folio.cli.portfolio",
    "cash": "folio.cli.portfolio",
    "history": "folio.cli.portfolio",
    "buy": "folio.cli.trade",
    "sell": "folio.cli.trade",
    "deposit": "folio.cli.trade",
    "add": "folio.cli.assets",
    "edit": "folio.cli.assets",
    "remove": "folio.cli.assets",
    "quote": "folio.cli.data",
    "search": "folio.cli.data",
    "refresh": "folio.cli.data",
    "market": "folio.cli.data",
    "reset": "folio.cli.reset",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="folio")
@click.option("-v", "--verbose", count=True, help="Show info (-v) or debug (-vv) logs.")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """folio - track positions, trades and cash across currencies.

    \b
    Quick Start:
      folio summary              # Value, gain and allocation
      folio buy AAPL 10          # Buy at the current quote
      folio deposit 1000 -c EUR  # Add euro cash
      folio history              # Ledger, newest first
    """
    from folio.config import load_config
    from folio.logging_setup import configure_logging

    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config()


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
