"""Position contract consumed by the portfolio and engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from quant_toolkit.models.numeric import Amount
from quant_toolkit.models.snapshot import MarketSnapshot


class PositionType(str, Enum):
    """Position type tags."""

    SPOT = "spot"
    LIQUIDITY_POOL = "liquidity_pool"
    OPTION = "option"
    PERPETUAL = "perpetual"
    FUTURE = "future"
    ORDERBOOK = "orderbook"


@runtime_checkable
class Position(Protocol):
    """Anything whose worth can be computed from a market snapshot.

    The portfolio treats positions opaquely: it only reads ``id`` and
    ``position_type`` and asks for ``value``. Positions are immutable from the
    portfolio's point of view; changing one means replacing it.
    """

    @property
    def id(self) -> str:
        """Identifier, unique within a portfolio."""
        ...

    @property
    def position_type(self) -> PositionType:
        """Type tag."""
        ...

    def value(self, snapshot: MarketSnapshot) -> Amount:
        """
        Value this position against a snapshot.

        Args:
            snapshot: Current market state

        Returns:
            Position value in the portfolio's denomination

        Raises:
            Exception: Any failure to value (e.g. missing price)
        """
        ...


@dataclass(frozen=True)
class SpotPosition:
    """Plain spot holding: ``quantity`` units of the base asset of ``pair``."""

    id: str
    pair: str
    quantity: Amount

    @property
    def position_type(self) -> PositionType:
        return PositionType.SPOT

    def value(self, snapshot: MarketSnapshot) -> Amount:
        return self.quantity * snapshot.price(self.pair)
