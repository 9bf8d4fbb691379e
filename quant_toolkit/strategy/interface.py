"""Strategy interface definition."""

from typing import Protocol, Sequence

from quant_toolkit.models.snapshot import MarketSnapshot
from quant_toolkit.strategy.actions import Action
from quant_toolkit.strategy.portfolio import Portfolio


class Strategy(Protocol):
    """Interface for backtestable strategies."""

    def rebalance(self, portfolio: Portfolio, snapshot: MarketSnapshot) -> Sequence[Action]:
        """
        Decide how to change the portfolio at this snapshot.

        Must not mutate the portfolio directly; every change is expressed as a
        returned action. Called once per snapshot.

        Args:
            portfolio: Current portfolio (read it, do not mutate it)
            snapshot: Current market state

        Returns:
            Actions to apply, in order (may be empty)
        """
        ...
