"""folio - portfolio ledger and valuation CLI."""

__version__ = "0.1.0"
