from __future__ import annotations

from decimal import Decimal, localcontext

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.analysis.criteria.total_profit import profit_ratio
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource
from tradebook.backtest.trade import Trade
from tradebook.backtest.types import Number, decimal_context, to_decimal


class LinearTransactionCostCriterion(AnalysisCriterion):
    """
    Transaction costs of a run, charged per order as a * traded_amount + b.

    Example: a=0.005, b=0.2 is 0.5% of notional plus a 0.2 fixed fee.
    The traded amount starts at `initial_amount` and is carried from trade
    to trade: reduced by the trade's costs, then multiplied by its profit ratio.
    """

    def __init__(self, initial_amount: Number, a: Number, b: Number = 0) -> None:
        self.initial_amount = to_decimal(initial_amount)
        self.a = to_decimal(a)
        self.b = to_decimal(b)
        if self.initial_amount is None or self.a is None or self.b is None:
            raise ValueError("initial_amount, a and b must be specified")

    def order_cost(self, traded_amount: Decimal) -> Decimal:
        return self.a * traded_amount + self.b

    def trade_cost(self, series: PriceSource, trade: Trade, traded_amount: Decimal) -> Decimal:
        total = Decimal(0)
        if not trade.entries:
            return total

        with localcontext(decimal_context()):
            if trade.has_amounts():
                for o in trade.entries:
                    total += self.order_cost(o.amount)
            else:
                total = self.order_cost(traded_amount)

            if trade.exits:
                # entry costs are paid before the position moves with the price
                exit_amount = (traded_amount - total) * profit_ratio(series, trade)
                if trade.has_amounts():
                    for o in trade.exits:
                        total += self.order_cost(o.amount)
                else:
                    total += self.order_cost(exit_amount)
        return total

    def calculate_trade(self, series: PriceSource, trade: Trade) -> float:
        return float(self.trade_cost(series, trade, self.initial_amount))

    def calculate_record(self, series: PriceSource, record: TradingRecord) -> float:
        total = Decimal(0)
        traded_amount = self.initial_amount

        with localcontext(decimal_context()):
            for trade in record.trades:
                cost = self.trade_cost(series, trade, traded_amount)
                total += cost
                traded_amount = (traded_amount - cost) * profit_ratio(series, trade)

            # an open position has paid its entry order
            if record.current_trade.is_opened():
                total += self.order_cost(traded_amount)
        return float(total)

    def better_than(self, value1: float, value2: float) -> bool:
        return value1 < value2
