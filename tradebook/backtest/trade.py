from __future__ import annotations

import logging
from decimal import Decimal, localcontext
from typing import Iterable

from tradebook.backtest.errors import (
    CannotCloseError,
    EnteredAfterExit,
    IncompleteTradeError,
    MissingPriceError,
    MixedAmountsError,
    NoEntryError,
    OutOfOrderIndex,
    SideMismatch,
)
from tradebook.backtest.order import Order
from tradebook.backtest.types import Number, Side, decimal_context

log = logging.getLogger(__name__)


def _check_amounts(group: list[Order], order: Order, label: str) -> None:
    if group and group[0].has_amount != order.has_amount:
        raise MixedAmountsError(
            f"{label} mix specified and unspecified amounts (order at index {order.index})"
        )


def _group_value(group: list[Order], label: str) -> Decimal:
    """
    Weighted value of a group of orders.

    All amounts unspecified -> each order weighted 1/count.
    All amounts specified   -> sum(price * amount).
    """
    if not group:
        raise IncompleteTradeError(f"trade has no {label}")
    if any(not o.has_price for o in group):
        raise MissingPriceError(f"some {label} have no price")

    with localcontext(decimal_context()):
        if all(not o.has_amount for o in group):
            return sum((o.price for o in group), Decimal(0)) / Decimal(len(group))
        return sum((o.price * o.amount for o in group), Decimal(0))


class Trade:
    """
    One round-trip: entry orders of `starting_side` followed by exit orders
    of the complementary side.

    Lifecycle: New -> Opened (entries) -> Closeable (entries + exits) -> Closed.
    Entries must all come before exits, indices are non-decreasing within
    each list and no exit may precede the last entry.
    """

    def __init__(self, starting_side: Side = Side.BUY) -> None:
        self._starting_side = Side(starting_side)
        self._entries: list[Order] = []
        self._exits: list[Order] = []
        self._closed = False

    @classmethod
    def of(cls, entry_order: Order, exit_order: Order) -> Trade:
        return cls.from_orders([entry_order], [exit_order])

    @classmethod
    def from_orders(cls, entries: Iterable[Order], exits: Iterable[Order] = ()) -> Trade:
        """
        Build a trade from existing orders by replaying them through
        enter()/exit(). The result is not closed.
        """
        entries = list(entries)
        exits = list(exits)
        if not entries:
            raise SideMismatch("a trade needs at least one entry order")

        side = entries[0].side
        if any(o.side is not side for o in entries):
            raise SideMismatch("entry orders must all have the same side")
        if any(o.side is side for o in exits):
            raise SideMismatch("exit orders must have the side opposite to the entries")

        trade = cls(side)
        for o in entries:
            trade.enter(o.index, o.price, o.amount)
        for o in exits:
            trade.exit(o.index, o.price, o.amount)
        return trade

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def enter(self, index: int, price: Number | None = None, amount: Number | None = None) -> Order:
        if self._closed:
            raise CannotCloseError("cannot enter a closed trade")
        if self._exits:
            raise EnteredAfterExit("cannot add entries once exits have started")

        order = Order(index, self._starting_side, price, amount)
        if self._entries and order.index < self._entries[-1].index:
            raise OutOfOrderIndex(
                f"entry index {order.index} precedes last entry index {self._entries[-1].index}"
            )
        _check_amounts(self._entries, order, "entries")

        self._entries.append(order)
        return order

    def exit(self, index: int, price: Number | None = None, amount: Number | None = None) -> Order:
        if self._closed:
            raise CannotCloseError("cannot exit a closed trade")
        if not self._entries:
            raise NoEntryError("cannot exit a trade without entries")

        order = Order(index, self._starting_side.complement(), price, amount)
        previous = self._exits[-1] if self._exits else self._entries[-1]
        if order.index < previous.index:
            raise OutOfOrderIndex(
                f"exit index {order.index} precedes previous order index {previous.index}"
            )
        _check_amounts(self._exits, order, "exits")

        self._exits.append(order)
        return order

    def close(self) -> Trade:
        if self._closed:
            raise CannotCloseError("trade is already closed")
        if not self.can_be_closed():
            raise CannotCloseError("trade needs entries and exits before closing")
        self._closed = True
        log.debug("Trade closed: %d entries, %d exits", len(self._entries), len(self._exits))
        return self

    # ------------------------------------------------------------------
    # projections
    # ------------------------------------------------------------------

    @property
    def starting_side(self) -> Side:
        return self._starting_side

    @property
    def entries(self) -> tuple[Order, ...]:
        return tuple(self._entries)

    @property
    def exits(self) -> tuple[Order, ...]:
        return tuple(self._exits)

    @property
    def first_entry(self) -> Order | None:
        return self._entries[0] if self._entries else None

    @property
    def first_exit(self) -> Order | None:
        return self._exits[0] if self._exits else None

    @property
    def last_entry(self) -> Order | None:
        return self._entries[-1] if self._entries else None

    @property
    def last_exit(self) -> Order | None:
        return self._exits[-1] if self._exits else None

    @property
    def first_entry_index(self) -> int | None:
        return self._entries[0].index if self._entries else None

    @property
    def last_exit_index(self) -> int | None:
        return self._exits[-1].index if self._exits else None

    @property
    def entry_indexes(self) -> list[int]:
        return [o.index for o in self._entries]

    @property
    def exit_indexes(self) -> list[int]:
        return [o.index for o in self._exits]

    def entries_value(self) -> Decimal:
        return _group_value(self._entries, "entries")

    def exits_value(self) -> Decimal:
        return _group_value(self._exits, "exits")

    # ------------------------------------------------------------------
    # predicates
    # ------------------------------------------------------------------

    def is_new(self) -> bool:
        return not self._entries and not self._exits

    def is_opened(self) -> bool:
        return bool(self._entries) and not self._exits

    def can_be_closed(self) -> bool:
        return bool(self._entries) and bool(self._exits) and not self._closed

    def is_closed(self) -> bool:
        return self._closed

    def has_prices(self) -> bool:
        orders = self._entries + self._exits
        return bool(orders) and all(o.has_price for o in orders)

    def has_amounts(self) -> bool:
        orders = self._entries + self._exits
        return bool(orders) and all(o.has_amount for o in orders)

    def entry_is_buy(self) -> bool:
        return self._starting_side is Side.BUY

    # closed flag is not part of identity
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trade):
            return NotImplemented
        return self._entries == other._entries and self._exits == other._exits

    def __hash__(self) -> int:
        return hash((tuple(self._entries), tuple(self._exits)))

    def __repr__(self) -> str:
        return f"Trade(entries={self._entries!r}, exits={self._exits!r})"
