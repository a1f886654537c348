from __future__ import annotations

from decimal import Decimal, localcontext

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade
from tradebook.backtest.types import decimal_context


def profit_ratio(series: PriceSource, trade: Trade) -> Decimal:
    """
    Close-price ratio of a round-trip, from the first entry to the first exit.

    BUY entries:  exit / entry
    SELL entries: entry / exit
    A trade without exits is neutral (1).
    """
    if trade.first_entry is None or trade.first_exit is None:
        return Decimal(1)

    entry_close = series.price_at(trade.first_entry.index)
    exit_close = series.price_at(trade.first_exit.index)

    with localcontext(decimal_context()):
        if trade.entry_is_buy():
            return exit_close / entry_close
        return entry_close / exit_close


class TotalProfitCriterion(AnalysisCriterion):
    """Compounded profit ratio of the closed trades (1.0 = flat)."""

    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return float(profit_ratio(series, trade))

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        value = Decimal(1)
        with localcontext(decimal_context()):
            for trade in record.trades:
                value *= profit_ratio(series, trade)
        return float(value)

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 > value2
