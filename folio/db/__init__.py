"""Snapshot persistence for folio."""

from folio.db.store import PortfolioStore, PortfolioStoreError

__all__ = ["PortfolioStore", "PortfolioStoreError"]
