from __future__ import annotations

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.analysis.criteria.drawdown import MaximumDrawdownCriterion
from tradebook.analysis.criteria.total_profit import TotalProfitCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade


def _ratio(profit: float, drawdown: float) -> float:
    if drawdown == 0.0:
        return float("inf")
    return profit / drawdown


class RewardRiskRatioCriterion(AnalysisCriterion):
    """Total profit divided by maximum drawdown (inf without drawdown)."""

    def __init__(self) -> None:
        self._profit = TotalProfitCriterion()
        self._drawdown = MaximumDrawdownCriterion()

    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return _ratio(
            self._profit.calculate_trade(series, trade),
            self._drawdown.calculate_trade(series, trade),
        )

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        return _ratio(
            self._profit.calculate_record(series, record),
            self._drawdown.calculate_record(series, record),
        )

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 > value2
