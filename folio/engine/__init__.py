"""Portfolio ledger and valuation engine."""

from folio.engine.currency import USD_RATES, to_usd, usd_rate
from folio.engine.deposit import apply_deposit, cash_ticker
from folio.engine.editor import apply_edit, remove_position
from folio.engine.ids import IdGenerator, SequentialIdGenerator
from folio.engine.liquidity import liquidity
from folio.engine.onboard import apply_onboard
from folio.engine.trade import USD_CASH, ExecutorState, TradeExecutor
from folio.engine.validator import SellCheck, can_afford, can_sell, describe_sell
from folio.engine.valuation import valuate

__all__ = [
    "ExecutorState",
    "IdGenerator",
    "SellCheck",
    "SequentialIdGenerator",
    "TradeExecutor",
    "USD_CASH",
    "USD_RATES",
    "apply_deposit",
    "apply_edit",
    "apply_onboard",
    "can_afford",
    "can_sell",
    "cash_ticker",
    "describe_sell",
    "liquidity",
    "remove_position",
    "to_usd",
    "usd_rate",
    "valuate",
]
