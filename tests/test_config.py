import logging

import pytest

from tradebook.analysis.criteria.factory import build_criteria
from tradebook.analysis.criteria.total_profit import TotalProfitCriterion
from tradebook.analysis.criteria.transaction_cost import LinearTransactionCostCriterion
from tradebook.backtest.types import decimal_context
from tradebook.backtest.order import buy_at, sell_at
from tradebook.backtest.types import Side
from tradebook.config.loader import load_run_config, load_yaml, parse_run_config
from tradebook.config.logs import configure_logging
from tradebook.config.settings import Settings


def test_load_yaml_mapping(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("starting_side: SELL\ncloses: [1, 2]\n")
    assert load_yaml(p) == {"starting_side": "SELL", "closes": [1, 2]}


def test_load_yaml_rejects_non_mapping(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_yaml(p)


def test_settings_precision_must_be_positive():
    with pytest.raises(ValueError):
        Settings(decimal_precision=0)


def test_decimal_context_uses_settings_precision():
    assert decimal_context().prec == Settings().decimal_precision


def test_build_criteria_in_config_order():
    cfg = {
        "criteria": [
            "total_profit",
            {"name": "linear_transaction_cost", "initial_amount": 1000, "a": 0.005, "b": 0.2},
        ]
    }
    out = build_criteria(cfg)
    assert list(out) == ["total_profit", "linear_transaction_cost"]
    assert isinstance(out["total_profit"], TotalProfitCriterion)
    assert isinstance(out["linear_transaction_cost"], LinearTransactionCostCriterion)


def test_build_criteria_empty():
    assert build_criteria({}) == {}


@pytest.mark.parametrize(
    "cfg",
    [
        {"criteria": "total_profit"},
        {"criteria": ["sharpe"]},
        {"criteria": [{"a": 1}]},
        {"criteria": [42]},
    ],
)
def test_build_criteria_rejects_bad_entries(cfg):
    with pytest.raises(ValueError):
        build_criteria(cfg)


def test_configure_logging_respects_existing_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        root.handlers = [logging.NullHandler()]
        configure_logging("DEBUG")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.NullHandler)

        configure_logging("DEBUG", force=True)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_load_yaml_empty_file(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("")
    assert load_yaml(p) == {}


def test_load_run_config(tmp_path):
    p = tmp_path / "run.yaml"
    p.write_text(
        "starting_side: sell\n"
        "closes: [100, 95.5, 101]\n"
        "orders:\n"
        "  - {side: SELL, index: 0}\n"
        "  - {side: buy, index: 2, price: 101, amount: 1}\n"
        "criteria: [total_profit]\n"
    )
    cfg = load_run_config(p)
    assert cfg.starting_side == Side.SELL
    assert cfg.closes == [100.0, 95.5, 101.0]
    assert cfg.orders == [sell_at(0), buy_at(2, 101, 1)]
    assert cfg.criteria == ["total_profit"]


def test_run_config_defaults_to_alternating_orders():
    cfg = parse_run_config({"starting_side": "BUY", "closes": [1, 2, 3]})
    assert cfg.orders == [buy_at(0), sell_at(1), buy_at(2)]
    assert cfg.criteria == []


def test_run_config_starting_side_defaults_to_settings():
    cfg = parse_run_config({"closes": [1]})
    assert cfg.starting_side == Side(Settings().starting_side.upper())


@pytest.mark.parametrize(
    "cfg",
    [
        {},
        {"closes": []},
        {"closes": [1, "x"]},
        {"closes": [1, 2], "starting_side": "LONG"},
        {"closes": [1, 2], "orders": {"side": "BUY", "index": 0}},
        {"closes": [1, 2], "orders": [{"side": "BUY"}]},
        {"closes": [1, 2], "orders": [{"side": "HOLD", "index": 0}]},
        {"closes": [1, 2], "orders": [{"side": "BUY", "index": 2}]},
        {"closes": [1, 2], "criteria": "total_profit"},
    ],
)
def test_run_config_rejects_bad_sections(cfg):
    with pytest.raises(ValueError):
        parse_run_config(cfg)
