from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from numbers import Integral

from tradebook.backtest.errors import InvalidOrder
from tradebook.backtest.types import Number, Side, to_decimal


def check_index(index: object) -> int:
    """Tick index as an int; bools, fractions and negatives are rejected."""
    if isinstance(index, bool) or not isinstance(index, Integral):
        raise InvalidOrder(f"order index must be an integer, got {index!r}")
    if index < 0:
        raise InvalidOrder(f"order index must be >= 0, got {index}")
    return int(index)


@dataclass(frozen=True)
class Order:
    """
    One recorded buy or sell at a tick index.

    price/amount are None when unspecified (amount is then inferred by the
    consumer, e.g. equal weighting in Trade.entries_value()).
    """
    index: int
    side: Side
    price: Decimal | None = None
    amount: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", check_index(self.index))
        object.__setattr__(self, "side", Side(self.side))
        object.__setattr__(self, "price", to_decimal(self.price))
        object.__setattr__(self, "amount", to_decimal(self.amount))

    @property
    def is_buy(self) -> bool:
        return self.side is Side.BUY

    @property
    def is_sell(self) -> bool:
        return self.side is Side.SELL

    @property
    def has_price(self) -> bool:
        return self.price is not None

    @property
    def has_amount(self) -> bool:
        return self.amount is not None


def buy_at(index: int, price: Number | None = None, amount: Number | None = None) -> Order:
    return Order(index=index, side=Side.BUY, price=price, amount=amount)


def sell_at(index: int, price: Number | None = None, amount: Number | None = None) -> Order:
    return Order(index=index, side=Side.SELL, price=price, amount=amount)
