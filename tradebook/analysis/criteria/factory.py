from __future__ import annotations

from typing import Any, Mapping

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.analysis.criteria.drawdown import MaximumDrawdownCriterion
from tradebook.analysis.criteria.number_of_trades import NumberOfTradesCriterion
from tradebook.analysis.criteria.profitable_trades import AverageProfitableTradesCriterion
from tradebook.analysis.criteria.reward_risk import RewardRiskRatioCriterion
from tradebook.analysis.criteria.total_profit import TotalProfitCriterion
from tradebook.analysis.criteria.transaction_cost import LinearTransactionCostCriterion

CRITERIA: dict[str, type[AnalysisCriterion]] = {
    "total_profit": TotalProfitCriterion,
    "linear_transaction_cost": LinearTransactionCostCriterion,
    "number_of_trades": NumberOfTradesCriterion,
    "average_profitable_trades": AverageProfitableTradesCriterion,
    "maximum_drawdown": MaximumDrawdownCriterion,
    "reward_risk_ratio": RewardRiskRatioCriterion,
}


def build_criteria(cfg: Mapping[str, Any]) -> dict[str, AnalysisCriterion]:
    """
    Builds criteria from a config mapping:
      {
        "criteria": [
          "total_profit",
          {"name": "linear_transaction_cost", "initial_amount": 1000, "a": 0.005, "b": 0.2},
        ]
      }
    Returns {name: criterion} in config order.
    """
    items = cfg.get("criteria", [])
    if not isinstance(items, list):
        raise ValueError("criteria must be a list")

    out: dict[str, AnalysisCriterion] = {}
    for item in items:
        if isinstance(item, str):
            name, kwargs = item, {}
        elif isinstance(item, Mapping) and "name" in item:
            kwargs = {k: v for k, v in item.items() if k != "name"}
            name = str(item["name"])
        else:
            raise ValueError(f"invalid criterion entry: {item!r}")

        if name not in CRITERIA:
            raise ValueError(f"unknown criterion: {name} (known: {sorted(CRITERIA)})")
        out[name] = CRITERIA[name](**kwargs)

    return out
