import pytest

from tradebook.analysis.criteria.transaction_cost import LinearTransactionCostCriterion
from tradebook.backtest.order import buy_at, sell_at
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSeries
from tradebook.backtest.trade import Trade


def test_one_trade_costs_compound_through_profit():
    series = PriceSeries([100, 105])
    record = TradingRecord.from_orders(buy_at(0), sell_at(1)).close_current()
    crit = LinearTransactionCostCriterion(1000, 0.01)

    # entry: 1% of 1000; exit: 1% of (1000 - 10) * 1.05
    assert crit.calculate(series, record) == pytest.approx(10 + 10.395)


def test_open_current_trade_pays_entry_on_carried_amount():
    series = PriceSeries([100, 105, 110])
    record = TradingRecord.from_orders(buy_at(0), sell_at(1), buy_at(2))
    crit = LinearTransactionCostCriterion(1000, 0.01)

    carried = (1000 - 20.395) * 1.05
    assert crit.calculate(series, record) == pytest.approx(20.395 + 0.01 * carried)


def test_fixed_fee_only():
    series = PriceSeries([100, 105, 110, 100, 95, 105])
    record = TradingRecord.from_orders(
        buy_at(0), sell_at(2),
        buy_at(3), sell_at(5),
    ).close_current()
    crit = LinearTransactionCostCriterion(1000, 0, 0.5)
    assert crit.calculate(series, record) == pytest.approx(2.0)


def test_known_amounts_are_charged_per_order():
    series = PriceSeries([100, 105])
    trade = Trade()
    trade.enter(0, 100, 2)
    trade.exit(1, 105, 2)
    crit = LinearTransactionCostCriterion(1000, 0.01, 1)
    assert crit.calculate(series, trade) == pytest.approx(2.04)


def test_scaled_in_amounts_each_pay_the_fee():
    series = PriceSeries([100, 101, 105])
    trade = Trade()
    trade.enter(0, 100, 1)
    trade.enter(1, 101, 1)
    trade.exit(2, 105, 2)
    crit = LinearTransactionCostCriterion(1000, 0, 1)
    assert crit.calculate(series, trade) == pytest.approx(3.0)


def test_new_trade_costs_nothing():
    series = PriceSeries([100])
    crit = LinearTransactionCostCriterion(1000, 0.01, 1)
    assert crit.calculate(series, Trade()) == 0.0
    assert crit.calculate(series, TradingRecord()) == 0.0


def test_rejects_unspecified_parameters():
    with pytest.raises(ValueError):
        LinearTransactionCostCriterion(float("nan"), 0.01)
    with pytest.raises(ValueError):
        LinearTransactionCostCriterion(1000, None)


def test_better_than_is_lower():
    crit = LinearTransactionCostCriterion(1000, 0.5)
    assert crit.better_than(3.1, 4.2)
    assert not crit.better_than(2.1, 1.9)
