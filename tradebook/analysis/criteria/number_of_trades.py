from __future__ import annotations

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade


class NumberOfTradesCriterion(AnalysisCriterion):
    """Closed trades in the record. Fewer trades (less churn) rank better."""

    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return 1.0

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        return float(record.trade_count)

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 < value2
