from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Mapping

from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade


class AnalysisCriterion(ABC):
    """
    Reduces a trade or a trading record to one comparable number.

    better_than() tells an optimizer which direction is preferred, so all
    criteria can be ranked the same way.
    """

    def calculate(self, series: PriceSource, target: Trade | TradingRecord) -> float:
        if isinstance(target, TradingRecord):
            return self.calculate_record(series, target)
        if isinstance(target, Trade):
            return self.calculate_trade(series, target)
        raise TypeError(f"cannot evaluate {type(target).__name__}")

    @abstractmethod
    def calculate_trade(self, series: PriceSource, trade: Trade) -> float: ...

    @abstractmethod
    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float: ...

    @abstractmethod
    def better_than(self, value1: float, value2: float) -> bool: ...

    def choose_best(self, series: PriceSource, records: Mapping[str, TradingRecord]) -> str:
        """
        Key of the best record under this criterion. Ties keep the first seen.
        """
        best_key: str | None = None
        best_value = 0.0

        for key, record in records.items():
            value = self.calculate_record(series, record)
            if best_key is None or self.better_than(value, best_value):
                best_key = key
                best_value = value

        if best_key is None:
            raise ValueError("No trading records to compare.")
        return best_key

    def __str__(self) -> str:
        name = re.sub(r"Criterion$", "", type(self).__name__)
        return re.sub(r"(?<=[a-z])(?=[A-Z])", " ", name)
