"""Portfolio: cash balance plus a keyed collection of positions."""

import logging
import threading
from decimal import Decimal

from quant_toolkit.models.numeric import (
    DECIMAL_CONTEXT,
    ZERO,
    Amount,
    DecimalLike,
    to_decimal,
)
from quant_toolkit.models.position import Position, PositionType
from quant_toolkit.models.snapshot import MarketSnapshot
from quant_toolkit.strategy.errors import (
    DuplicatePositionError,
    InvalidActionError,
    PositionNotFoundError,
    PositionValuationError,
)

logger = logging.getLogger(__name__)


class Portfolio:
    """Mechanism-agnostic holder of cash and positions.

    Cash is a signed Decimal: negative cash represents borrowed funds. Position
    ids are unique. Every read returns a copy, so a monitoring thread may call
    ``positions()`` or ``cash()`` while a run is in progress; writes are
    expected from a single caller (the engine applying actions).

    Example:
        >>> portfolio = Portfolio(Amount.of(10000))
        >>> portfolio.add_position(SpotPosition("eth", "ETH/USD", Amount.of(2)))
        >>> portfolio.value(snapshot)
        Amount('16000')
    """

    def __init__(self, initial_cash: Amount | None = None):
        """
        Initialize portfolio.

        Args:
            initial_cash: Starting cash balance (default: zero)
        """
        self._lock = threading.RLock()
        self._positions: dict[str, Position] = {}
        self._cash: Decimal = initial_cash.decimal if initial_cash is not None else ZERO

    def add_position(self, position: Position) -> None:
        """
        Add a position.

        Raises:
            InvalidActionError: If position is None
            DuplicatePositionError: If a position with the same id exists
        """
        if position is None:
            raise InvalidActionError("cannot add None position")

        with self._lock:
            position_id = position.id
            if position_id in self._positions:
                raise DuplicatePositionError(position_id)
            self._positions[position_id] = position

    def remove_position(self, position_id: str) -> Position:
        """
        Remove a position by id.

        Returns:
            The removed position

        Raises:
            PositionNotFoundError: If no position has that id
        """
        with self._lock:
            if position_id not in self._positions:
                raise PositionNotFoundError(position_id)
            return self._positions.pop(position_id)

    def replace_position(self, old_position_id: str, new_position: Position) -> None:
        """
        Replace a position: remove ``old_position_id`` then add ``new_position``.

        Not transactional. If the add fails after the remove succeeded, the old
        position stays removed and the error propagates.

        Raises:
            PositionNotFoundError: If the old position does not exist
            DuplicatePositionError: If the new id collides with another position
        """
        if new_position is None:
            raise InvalidActionError("new position cannot be None")

        with self._lock:
            self.remove_position(old_position_id)
            self.add_position(new_position)

    def adjust_cash(self, delta: DecimalLike) -> None:
        """Add ``delta`` (positive or negative) to cash."""
        with self._lock:
            self._cash = DECIMAL_CONTEXT.add(self._cash, to_decimal(delta))

    def set_cash(self, amount: Amount) -> None:
        """Set cash to a specific non-negative amount."""
        with self._lock:
            self._cash = amount.decimal

    def cash(self) -> Decimal:
        """Signed cash balance (negative when borrowing)."""
        with self._lock:
            return self._cash

    def cash_amount(self) -> Amount:
        """Cash as an Amount; zero when the balance is negative."""
        with self._lock:
            if self._cash < 0:
                return Amount.zero()
            return Amount(self._cash)

    def has_position(self, position_id: str) -> bool:
        with self._lock:
            return position_id in self._positions

    def get_position(self, position_id: str) -> Position:
        """
        Get a position by id.

        Raises:
            PositionNotFoundError: If no position has that id
        """
        with self._lock:
            try:
                return self._positions[position_id]
            except KeyError:
                raise PositionNotFoundError(position_id) from None

    def positions(self) -> list[Position]:
        """Snapshot list of held positions; mutating it does not affect the portfolio."""
        with self._lock:
            return list(self._positions.values())

    def positions_by_type(self, position_type: PositionType) -> list[Position]:
        with self._lock:
            return [p for p in self._positions.values() if p.position_type == position_type]

    def position_count(self) -> int:
        with self._lock:
            return len(self._positions)

    def _sum_position_values(self, snapshot: MarketSnapshot) -> Decimal:
        """Sum position values; any single failure aborts the whole valuation."""
        with self._lock:
            items = list(self._positions.items())

        total = ZERO
        for position_id, position in items:
            try:
                position_value = position.value(snapshot)
            except Exception as e:
                raise PositionValuationError(position_id, str(e)) from e
            total = DECIMAL_CONTEXT.add(total, position_value.decimal)
        return total

    def positions_value(self, snapshot: MarketSnapshot) -> Amount:
        """Total value of all positions, excluding cash."""
        return Amount(self._sum_position_values(snapshot))

    def net_value(self, snapshot: MarketSnapshot) -> Decimal:
        """Signed total value: cash plus positions. Negative when underwater."""
        with self._lock:
            cash = self._cash
            total = self._sum_position_values(snapshot)
        return DECIMAL_CONTEXT.add(cash, total)

    def value(self, snapshot: MarketSnapshot) -> Amount:
        """
        Total portfolio value: cash plus every position's value.

        An underwater portfolio (debt exceeding all holdings) is valued at
        zero; use ``net_value`` for the signed figure.

        Args:
            snapshot: Market state to value against

        Returns:
            Portfolio value

        Raises:
            PositionValuationError: If any position fails to value
        """
        total = self.net_value(snapshot)
        if total < 0:
            logger.debug(f"Portfolio underwater: net value {total}")
            return Amount.zero()
        return Amount(total)

    def clone(self) -> "Portfolio":
        """Independent copy of cash and the position map (positions are shared)."""
        copy = Portfolio()
        with self._lock:
            copy._positions = dict(self._positions)
            copy._cash = self._cash
        return copy

    def restore(self, other: "Portfolio") -> None:
        """Overwrite this portfolio's state with ``other``'s."""
        with other._lock:
            positions = dict(other._positions)
            cash = other._cash
        with self._lock:
            self._positions = positions
            self._cash = cash

    def clear(self) -> None:
        """Remove all positions and reset cash to zero."""
        with self._lock:
            self._positions = {}
            self._cash = ZERO

    def summary(self, snapshot: MarketSnapshot | None = None) -> str:
        """Human-readable one-line summary."""
        with self._lock:
            text = f"Portfolio: {len(self._positions)} positions, Cash: {self._cash}"

        if snapshot is not None:
            try:
                text += f", Total Value: {self.net_value(snapshot)}"
            except PositionValuationError as e:
                logger.debug(f"Summary valuation skipped: {e}")
        return text
