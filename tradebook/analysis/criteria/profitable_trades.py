from __future__ import annotations

from decimal import Decimal, localcontext

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource, average_price
from tradebook.backtest.trade import Trade
from tradebook.backtest.types import decimal_context


def _weighted_profit(series: PriceSource, trade: Trade) -> Decimal:
    # recorded prices when every order has one, average closes otherwise
    with localcontext(decimal_context()):
        if trade.has_prices():
            entries, exits = trade.entries_value(), trade.exits_value()
        else:
            entries = average_price(series, trade.entry_indexes)
            exits = average_price(series, trade.exit_indexes)
        return exits / entries if trade.entry_is_buy() else entries / exits


def is_profitable(series: PriceSource, trade: Trade) -> bool:
    if not trade.entries or not trade.exits:
        return False
    return _weighted_profit(series, trade) > 1


class AverageProfitableTradesCriterion(AnalysisCriterion):
    """Share of closed trades that made money (0.0 for an empty record)."""

    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return 1.0 if is_profitable(series, trade) else 0.0

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        if record.trade_count == 0:
            return 0.0
        profitable = sum(1 for t in record.trades if is_profitable(series, t))
        return profitable / record.trade_count

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 > value2
