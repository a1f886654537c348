from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Iterable, Protocol

import pandas as pd

from tradebook.backtest.types import Number, decimal_context, to_decimal


class PriceSource(Protocol):
    """Close prices by tick index. Must return the same value for an index for a whole run."""

    @property
    def end_index(self) -> int: ...

    def price_at(self, index: int) -> Decimal: ...


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def average_price(source: PriceSource, indexes: Iterable[int]) -> Decimal:
    idx = list(indexes)
    if not idx:
        raise ValueError("average_price needs at least one index")
    with localcontext(decimal_context()):
        return sum((source.price_at(i) for i in idx), Decimal(0)) / Decimal(len(idx))


class PriceSeries:
    """
    Close prices held as exact decimals in a positional pandas Series.
    """

    def __init__(self, closes: Iterable[Number]) -> None:
        values = [to_decimal(c) for c in closes]
        if any(v is None for v in values):
            raise ValueError("close prices must all be specified")
        # profit ratios divide by closes
        bad = [i for i, v in enumerate(values) if v <= 0]
        if bad:
            raise ValueError(f"close prices must be > 0 (bad indexes: {bad[:5]})")
        self._closes = pd.Series(values, dtype=object)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, column: str = "close") -> PriceSeries:
        """
        Expects a frame already sorted by time; only `column` is used.
        """
        _require_cols(df, [column])
        numeric = pd.to_numeric(df[column], errors="coerce")
        if numeric.isna().any():
            raise ValueError(f"Column {column!r} has missing or non-numeric values")
        return cls(df[column].tolist())

    def __len__(self) -> int:
        return int(self._closes.size)

    @property
    def end_index(self) -> int:
        return len(self) - 1

    def price_at(self, index: int) -> Decimal:
        i = int(index)
        if not 0 <= i < len(self):
            raise IndexError(f"index {i} outside series [0, {self.end_index}]")
        return self._closes.iloc[i]

    def average_price(self, indexes: Iterable[int]) -> Decimal:
        return average_price(self, indexes)

    def to_series(self) -> pd.Series:
        return self._closes.astype(float)
