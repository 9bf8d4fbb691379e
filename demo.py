"""Demo script running a threshold rebalancing strategy through the backtest engine."""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Sequence

from quant_toolkit.backtest import BacktestEngine
from quant_toolkit.config.loader import load_config
from quant_toolkit.models import Amount, MarketSnapshot, Price, SimpleSnapshot, SpotPosition
from quant_toolkit.strategy import (
    Action,
    AddPositionAction,
    AdjustCashAction,
    BatchAction,
    Portfolio,
    ReplacePositionAction,
)

logger = logging.getLogger(__name__)

PAIR = "ETH/USD"
# Daily closes for a month of synthetic ETH prices
PRICES = [
    "2000", "2040", "2015", "2090", "2130", "2080", "2010", "1950", "1990", "2060",
    "2120", "2180", "2150", "2230", "2290", "2240", "2190", "2210", "2280", "2350",
    "2310", "2260", "2200", "2170", "2230", "2300", "2380", "2420", "2390", "2450",
]


class ThresholdRebalanceStrategy:
    """Keep a target share of portfolio value in ETH.

    Rebalances only when the ETH weight drifts more than ``band`` away from
    ``target_weight``. The whole ETH holding is a single spot position that is
    replaced on every rebalance.
    """

    def __init__(self, target_weight: Decimal = Decimal("0.6"), band: Decimal = Decimal("0.05")):
        self.target_weight = target_weight
        self.band = band

    def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> Sequence[Action]:
        price = snapshot.price(PAIR)
        total = portfolio.value(snapshot).decimal
        held = portfolio.get_position("eth") if portfolio.has_position("eth") else None
        held_value = held.value(snapshot).decimal if held is not None else Decimal(0)

        weight = held_value / total
        if held is not None and abs(weight - self.target_weight) <= self.band:
            return []

        target_value = total * self.target_weight
        new_position = SpotPosition(id="eth", pair=PAIR, quantity=Amount(target_value) / price)
        trade = AdjustCashAction(held_value - target_value, reason=f"rebalance at {price}")

        if held is None:
            return [BatchAction(trade, AddPositionAction(new_position))]
        return [BatchAction(trade, ReplacePositionAction("eth", new_position))]


def build_snapshots() -> list[SimpleSnapshot]:
    """Daily snapshots from PRICES."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        SimpleSnapshot(timestamp=start + timedelta(days=i), price_map={PAIR: Price.of(p)})
        for i, p in enumerate(PRICES)
    ]


def main() -> None:
    """Run demo backtest and print its summary."""
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("🎬 DEMO: Threshold rebalancing backtest")
    logger.info("=" * 60)
    logger.info(f"✅ Config loaded: initial_cash={config.initial_cash}")

    engine = BacktestEngine(config)
    result = engine.run(ThresholdRebalanceStrategy(), build_snapshots())

    logger.info("=" * 60)
    for line in result.summary().splitlines():
        logger.info(line)
    logger.info(f"  {result.portfolio.summary()}")
    logger.info("\n🏁 DEMO COMPLETE")


if __name__ == "__main__":
    main()
