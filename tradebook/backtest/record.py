from __future__ import annotations

import logging
from typing import Iterator

from tradebook.backtest.errors import CannotCloseError, OutOfOrderIndex
from tradebook.backtest.order import Order, check_index
from tradebook.backtest.trade import Trade
from tradebook.backtest.types import Number, Side

log = logging.getLogger(__name__)


class TradingRecord:
    """
    Chronological ledger of the trades of one strategy run.

    Holds the closed trades plus exactly one current trade, which is never
    closed: closing moves it into `trades` and a fresh trade with the
    record's starting side takes its place.
    """

    def __init__(self, starting_side: Side = Side.BUY) -> None:
        self._starting_side = Side(starting_side)
        self._trades: list[Trade] = []
        self._current = Trade(self._starting_side)

    @classmethod
    def from_orders(cls, *orders: Order, starting_side: Side | None = None) -> TradingRecord:
        """
        Replay already recorded orders as if they were received live.

        An order is an entry when its side matches the current trade's
        starting side, an exit otherwise. When the current trade is new and
        the order has the opposite side, the next trade starts on that side
        (side reversal, e.g. BUY, SELL, SELL, BUY).
        """
        if starting_side is None:
            starting_side = orders[0].side if orders else Side.BUY
        record = cls(starting_side)

        for o in orders:
            if record._current.can_be_closed() and o.side is record._current.starting_side:
                record._close_slot()

            current = record._current
            if current.is_new() and o.side is not current.starting_side:
                log.debug("Side reversal at index %d: next trade starts with %s", o.index, o.side.value)
                record._current = Trade(o.side)
                current = record._current

            if o.side is current.starting_side:
                record.enter(o.index, o.price, o.amount)
            else:
                record.exit(o.index, o.price, o.amount)
        return record

    @property
    def starting_side(self) -> Side:
        return self._starting_side

    @property
    def current_trade(self) -> Trade:
        return self._current

    @property
    def trades(self) -> tuple[Trade, ...]:
        """Closed trades, oldest first."""
        return tuple(self._trades)

    @property
    def trade_count(self) -> int:
        return len(self._trades)

    @property
    def last_trade(self) -> Trade | None:
        return self._trades[-1] if self._trades else None

    def enter(self, index: int, price: Number | None = None, amount: Number | None = None) -> bool:
        index = check_index(index)
        last = self.last_order()
        if last is not None and index < last.index:
            raise OutOfOrderIndex(f"entry index {index} precedes last recorded order index {last.index}")

        if self._current.can_be_closed():
            log.debug("Entry at index %d closes the current trade", index)
            self._close_slot()
        self._current.enter(index, price, amount)
        return True

    def exit(self, index: int, price: Number | None = None, amount: Number | None = None) -> bool:
        self._current.exit(index, price, amount)
        return True

    def operate(self, index: int, price: Number | None = None, amount: Number | None = None) -> bool:
        """Enter when flat, exit otherwise."""
        if self._current.is_new():
            return self.enter(index, price, amount)
        return self.exit(index, price, amount)

    def close_current(self) -> TradingRecord:
        if self._current.is_closed():
            raise CannotCloseError("current trade should never be closed")
        if not self._current.can_be_closed():
            raise CannotCloseError("current trade has no exit orders to close against")
        self._close_slot()
        return self

    def is_closed(self) -> bool:
        """True when no position is open (the current trade has no orders)."""
        return self._current.is_new()

    def last_order(self, side: Side | None = None) -> Order | None:
        for order in self._orders_newest_first():
            if side is None or order.side is side:
                return order
        return None

    def last_entry(self) -> Order | None:
        for trade in self._trades_newest_first():
            if trade.last_entry is not None:
                return trade.last_entry
        return None

    def last_exit(self) -> Order | None:
        for trade in self._trades_newest_first():
            if trade.last_exit is not None:
                return trade.last_exit
        return None

    def _close_slot(self) -> None:
        trade = self._current.close()
        self._trades.append(trade)
        self._current = Trade(self._starting_side)
        log.debug("Trade %d recorded", len(self._trades))

    def _trades_newest_first(self) -> Iterator[Trade]:
        yield self._current
        yield from reversed(self._trades)

    def _orders_newest_first(self) -> Iterator[Order]:
        for trade in self._trades_newest_first():
            yield from reversed(trade.exits)
            yield from reversed(trade.entries)

    def __repr__(self) -> str:
        return f"TradingRecord(trades={self._trades!r}, current={self._current!r})"
