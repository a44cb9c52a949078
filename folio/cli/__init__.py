"""CLI commands for folio.

This package provides the command-line interface for folio,
including valuation views, trading, cash and market-data commands.
"""

from folio.cli.main import cli, main

__all__ = ["cli", "main"]
