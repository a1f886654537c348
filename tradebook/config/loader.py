from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from tradebook.backtest.order import Order
from tradebook.backtest.types import Side
from tradebook.config.settings import Settings


@dataclass(frozen=True)
class RunConfig:
    """Typed view of a criteria run config (see configs/criteria.yaml)."""

    starting_side: Side
    closes: list[float]
    orders: list[Order]
    criteria: list[Any]


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    data = yaml.safe_load(p.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: config must be a YAML mapping at the top level.")
    return data


def _alternating_orders(n: int, starting_side: Side) -> list[Order]:
    # entry, exit, entry, exit ... one order per bar
    return [Order(i, starting_side if i % 2 == 0 else starting_side.complement()) for i in range(n)]


def _parse_order(row: Any, pos: int) -> Order:
    if not isinstance(row, Mapping) or "side" not in row or "index" not in row:
        raise ValueError(f"orders[{pos}] needs 'side' and 'index': {row!r}")
    try:
        side = Side(str(row["side"]).upper())
    except ValueError as ex:
        raise ValueError(f"orders[{pos}] has unknown side {row['side']!r}") from ex
    return Order(index=row["index"], side=side, price=row.get("price"), amount=row.get("amount"))


def parse_run_config(cfg: Mapping[str, Any]) -> RunConfig:
    """
    Validates the sections of a run config:
      starting_side: BUY | SELL       (default: Settings().starting_side)
      closes:        non-empty list of numbers
      orders:        list of {side, index[, price][, amount]}
                     (default: alternating entry/exit, one per close)
      criteria:      list handed to build_criteria()
    """
    try:
        starting_side = Side(str(cfg.get("starting_side", Settings().starting_side)).upper())
    except ValueError as ex:
        raise ValueError(f"unknown starting_side: {cfg.get('starting_side')!r}") from ex

    closes = cfg.get("closes")
    if not isinstance(closes, list) or not closes:
        raise ValueError("closes must be a non-empty list")
    if any(isinstance(c, bool) or not isinstance(c, (int, float)) for c in closes):
        raise ValueError("closes must all be numbers")

    rows = cfg.get("orders")
    if rows is None:
        orders = _alternating_orders(len(closes), starting_side)
    elif isinstance(rows, list):
        orders = [_parse_order(r, i) for i, r in enumerate(rows)]
    else:
        raise ValueError("orders must be a list")

    last = max((o.index for o in orders), default=-1)
    if last >= len(closes):
        raise ValueError(f"order index {last} is past the last close (index {len(closes) - 1})")

    criteria = cfg.get("criteria", [])
    if not isinstance(criteria, list):
        raise ValueError("criteria must be a list")

    return RunConfig(
        starting_side=starting_side,
        closes=[float(c) for c in closes],
        orders=orders,
        criteria=criteria,
    )


def load_run_config(path: str | Path) -> RunConfig:
    return parse_run_config(load_yaml(path))
