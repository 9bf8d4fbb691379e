"""Market snapshot models: one immutable view of the market per simulation step."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from quant_toolkit.models.numeric import Price


class PriceNotAvailableError(LookupError):
    """Raised when a snapshot has no price for the requested pair."""


def pair_key(base: str, quote: str) -> str:
    """Build the pair key used to index snapshot prices (e.g. ``ETH/USD``)."""
    return f"{base.upper()}/{quote.upper()}"


@runtime_checkable
class MarketSnapshot(Protocol):
    """Read-only market state at a single point in time."""

    @property
    def timestamp(self) -> datetime:
        """Time this snapshot describes."""
        ...

    def price(self, pair: str) -> Price:
        """
        Get the price for a pair.

        Raises:
            PriceNotAvailableError: If the pair is not quoted in this snapshot
        """
        ...

    def prices(self) -> Mapping[str, Price]:
        """All quoted prices, keyed by pair."""
        ...

    def get(self, key: str, default: Any = None) -> Any:
        """Auxiliary data (implied volatility, funding rate, pool tick, ...)."""
        ...


@dataclass(frozen=True)
class SimpleSnapshot:
    """Dictionary-backed MarketSnapshot.

    Both maps are copied and exposed read-only, so the snapshot cannot be
    changed after construction. Use ``with_metadata`` to derive a new one.
    """

    timestamp: datetime
    price_map: Mapping[str, Price] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the price and metadata maps."""
        for pair, price in self.price_map.items():
            if not isinstance(price, Price):
                raise TypeError(f"Price for {pair} must be a Price, got {type(price).__name__}")
        object.__setattr__(self, "price_map", MappingProxyType(dict(self.price_map)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __hash__(self) -> int:
        # The read-only maps are unhashable; equal snapshots share a timestamp
        return hash(self.timestamp)

    def price(self, pair: str) -> Price:
        try:
            return self.price_map[pair]
        except KeyError:
            raise PriceNotAvailableError(
                f"price not available for pair {pair} at {self.timestamp.isoformat()}"
            ) from None

    def prices(self) -> Mapping[str, Price]:
        return self.price_map

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def with_metadata(self, **values: Any) -> "SimpleSnapshot":
        """Return a copy of this snapshot with extra metadata entries."""
        merged = {**self.metadata, **values}
        return replace(self, metadata=merged)
