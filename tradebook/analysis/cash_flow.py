from __future__ import annotations

from decimal import Decimal, localcontext

import pandas as pd

from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource, average_price
from tradebook.backtest.trade import Trade
from tradebook.backtest.types import decimal_context


class CashFlow:
    """
    Equity curve (starting at 1) produced by a trade or the closed trades of
    a record, one value per series index.

    Inside a trade the value at index i is the value at the first entry times
    the trade's ratio at i. Between trades and after the last one the last
    value is carried forward.
    """

    def __init__(self, series: PriceSource, target: Trade | TradingRecord) -> None:
        self.series = series
        self._values: list[Decimal] = [Decimal(1)]

        trades = target.trades if isinstance(target, TradingRecord) else (target,)
        with localcontext(decimal_context()):
            for trade in trades:
                self._add_trade(trade)
        self._fill_to_end()

    def _add_trade(self, trade: Trade) -> None:
        if not trade.entries or not trade.exits:
            return

        entry_index = trade.first_entry_index
        begin = entry_index + 1
        if begin > len(self._values):
            self._values.extend([self._values[-1]] * (begin - len(self._values)))

        start_value = self._values[entry_index]
        avg_entry = None if trade.has_prices() else average_price(self.series, trade.entry_indexes)

        for i in range(max(begin, 1), trade.last_exit_index + 1):
            if trade.has_prices():
                ratio = trade.exits_value() / trade.entries_value()
            else:
                ratio = self.series.price_at(i) / avg_entry
            if not trade.entry_is_buy():
                ratio = 1 / ratio
            self._values.append(start_value * ratio)

    def _fill_to_end(self) -> None:
        missing = self.series.end_index + 1 - len(self._values)
        if missing > 0:
            self._values.extend([self._values[-1]] * missing)

    def __len__(self) -> int:
        return len(self._values)

    def value_at(self, index: int) -> Decimal:
        return self._values[index]

    def to_series(self) -> pd.Series:
        return pd.Series([float(v) for v in self._values], dtype=float)
