"""Shared builders for snapshots, positions and strategies used across tests."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Sequence

from quant_toolkit.models import Amount, MarketSnapshot, PositionType, Price, SimpleSnapshot
from quant_toolkit.strategy import Action, Portfolio

START_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_snapshots(
    count: int,
    interval: timedelta = timedelta(hours=1),
    start: datetime = START_TIME,
    base_price: Decimal = Decimal("100"),
    step: Decimal = Decimal("5"),
) -> list[SimpleSnapshot]:
    """Build ``count`` snapshots quoting ETH/USD at base_price + step * i."""
    return [
        SimpleSnapshot(
            timestamp=start + interval * i,
            price_map={"ETH/USD": Price(base_price + step * i)},
        )
        for i in range(count)
    ]


def snapshots_from_prices(
    prices: Sequence[str | int],
    interval: timedelta = timedelta(hours=1),
) -> list[SimpleSnapshot]:
    """Build one ETH/USD snapshot per price, ``interval`` apart."""
    return [
        SimpleSnapshot(timestamp=START_TIME + interval * i, price_map={"ETH/USD": Price.of(p)})
        for i, p in enumerate(prices)
    ]


@dataclass(frozen=True)
class StubPosition:
    """Position with a constant value, or one that fails to value."""

    id: str
    fixed_value: Amount = Amount(Decimal(0))
    position_type: PositionType = PositionType.SPOT
    fail_with: Exception | None = None

    def value(self, snapshot: MarketSnapshot) -> Amount:
        if self.fail_with is not None:
            raise self.fail_with
        return self.fixed_value


class CallableStrategy:
    """Strategy delegating to a function of (index, portfolio, snapshot)."""

    def __init__(self, fn: Callable[[int, Portfolio, MarketSnapshot], Sequence[Action]]):
        self.fn = fn
        self.calls = 0

    def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> Sequence[Action]:
        index = self.calls
        self.calls += 1
        return self.fn(index, portfolio, snapshot)


class NoopStrategy:
    """Strategy that never acts."""

    def __init__(self) -> None:
        self.calls = 0

    def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> Sequence[Action]:
        self.calls += 1
        return []
