from __future__ import annotations

import math
from typing import Any, Mapping

from tradebook.analysis.criteria.base import AnalysisCriterion
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSource


def criteria_to_dict(
    series: PriceSource,
    record: TradingRecord,
    criteria: Mapping[str, AnalysisCriterion],
) -> dict[str, Any]:
    d: dict[str, Any] = {}
    for name, criterion in criteria.items():
        value = criterion.calculate_record(series, record)
        # Normalize inf for JSON
        d[name] = None if math.isinf(value) else value
    return d
