"""Data models for folio."""

from folio.models.command import (
    DepositCommand,
    EditCommand,
    OnboardCommand,
    TradeCommand,
)
from folio.models.position import ASSET_CLASSES, AssetClass, Position
from folio.models.quote import (
    MarketIndex,
    MarketIndices,
    MarketSnapshot,
    Quote,
    SearchResult,
)
from folio.models.result import ActionResult, RejectionReason
from folio.models.state import PortfolioState
from folio.models.trade import TradeKind, TradeRecord
from folio.models.valuation import AllocationEntry, Liquidity, Valuation

__all__ = [
    "ASSET_CLASSES",
    "ActionResult",
    "AllocationEntry",
    "AssetClass",
    "DepositCommand",
    "EditCommand",
    "Liquidity",
    "MarketIndex",
    "MarketIndices",
    "MarketSnapshot",
    "OnboardCommand",
    "PortfolioState",
    "Position",
    "Quote",
    "RejectionReason",
    "SearchResult",
    "TradeCommand",
    "TradeKind",
    "TradeRecord",
    "Valuation",
]
