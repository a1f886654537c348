"""Trade bookkeeping errors.

All of them signal misuse by the caller (strategy logic), never a transient
fault. They are raised before any state changes, so the trade or record that
raised stays usable.
"""


class TradingError(Exception):
    """Base class for all bookkeeping errors."""


class TradingStateError(TradingError):
    """Operation not allowed in the current trade/record state."""


class InvalidOrder(TradingError, ValueError):
    """Order index is negative."""


class OutOfOrderIndex(TradingError, ValueError):
    """Order index precedes the previous order of the same list."""


class SideMismatch(TradingError, ValueError):
    """Entry/exit orders given to a trade have inconsistent sides."""


class MixedAmountsError(TradingError, ValueError):
    """Some orders of a group carry an amount and others do not."""


class NoEntryError(TradingStateError):
    """Exit attempted on a trade without entries."""


class EnteredAfterExit(TradingStateError):
    """Entry attempted on a trade that already has exits."""


class CannotCloseError(TradingStateError):
    """Trade or record is not in a closeable state."""


class IncompleteTradeError(TradingStateError):
    """Value queried before the required orders exist."""


class MissingPriceError(TradingStateError):
    """Value queried while an order has no price."""
