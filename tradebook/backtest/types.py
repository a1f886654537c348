from __future__ import annotations

from decimal import Context, Decimal, InvalidOperation
from enum import Enum

from tradebook.config.settings import Settings

Number = int | float | str | Decimal


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    def complement(self) -> Side:
        return Side.SELL if self is Side.BUY else Side.BUY


def to_decimal(value: Number | None) -> Decimal | None:
    """
    Exact decimal for a price/amount, or None when unspecified.

    Floats go through str() so 1.1 becomes Decimal("1.1").
    A NaN input is treated as unspecified.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        out = value
    elif isinstance(value, bool):
        raise TypeError("bool is not a valid price or amount")
    elif isinstance(value, (int, float, str)):
        try:
            out = Decimal(str(value))
        except InvalidOperation as ex:
            raise ValueError(f"not a decimal value: {value!r}") from ex
    else:
        raise TypeError(f"unsupported numeric type: {type(value).__name__}")

    if out.is_nan():
        return None
    return out


def decimal_context() -> Context:
    return Context(prec=Settings().decimal_precision)
