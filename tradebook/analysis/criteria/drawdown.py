from __future__ import annotations

import numpy as np

from tradebook.analysis.cash_flow import CashFlow
from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade


def max_drawdown(equity: np.ndarray) -> float:
    """Largest peak-to-trough fall, as a fraction of the peak (0.0 = none)."""
    arr = np.asarray(equity, dtype=float)
    if arr.size == 0:
        return 0.0
    run_max = np.maximum.accumulate(arr)
    drawdown = (run_max - arr) / run_max
    return float(drawdown.max())


class MaximumDrawdownCriterion(AnalysisCriterion):
    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return max_drawdown(CashFlow(series, trade).to_series().to_numpy())

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        return max_drawdown(CashFlow(series, record).to_series().to_numpy())

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 < value2
