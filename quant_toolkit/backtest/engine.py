"""Event-driven backtest engine.

Replays an ordered sequence of market snapshots through a strategy, applying
the actions it returns to a portfolio and recording the portfolio value at
every step.
"""

import logging
from typing import Iterable, Protocol

from quant_toolkit.config.models import EngineConfig
from quant_toolkit.models.numeric import Amount
from quant_toolkit.models.snapshot import MarketSnapshot
from quant_toolkit.strategy.interface import Strategy
from quant_toolkit.strategy.portfolio import Portfolio

from .errors import (
    ActionApplicationError,
    BacktestCancelledError,
    BacktestError,
    BacktestValidationError,
    PortfolioValuationError,
    StrategyRebalanceError,
)
from .metrics import MetricsCalculator
from .result import BacktestResult, ValuePoint
from .state_machine import EngineState, EngineStateMachine

logger = logging.getLogger(__name__)


class CancelEvent(Protocol):
    """Anything exposing ``is_set()``, normally a ``threading.Event``."""

    def is_set(self) -> bool: ...


class BacktestEngine:
    """Runs strategies against historical snapshots.

    The engine holds no state between runs except its configuration and the
    run state machine; every run starts from a fresh portfolio.

    Example:
        >>> engine = BacktestEngine(EngineConfig(initial_cash=Decimal("10000")))
        >>> result = engine.run(strategy, snapshots)
        >>> print(result.summary())
    """

    def __init__(self, config: EngineConfig | None = None):
        """Initialize backtest engine.

        Args:
            config: Engine configuration (defaults to EngineConfig())
        """
        self.config = config or EngineConfig()
        self.state_machine = EngineStateMachine()

    @property
    def state(self) -> EngineState:
        return self.state_machine.current_state

    def run(
        self,
        strategy: Strategy,
        snapshots: Iterable[MarketSnapshot],
        cancel_event: CancelEvent | None = None,
    ) -> BacktestResult:
        """Execute a backtest.

        For each snapshot, in order: check cancellation, value the portfolio
        and record it, ask the strategy for actions, then apply them. The
        recorded value is the pre-rebalance value; the final value is taken
        after the last snapshot's actions.

        Args:
            strategy: Strategy deciding actions at each snapshot
            snapshots: Chronologically ordered market snapshots
            cancel_event: Optional cancellation flag checked before each snapshot

        Returns:
            BacktestResult with value history and derived statistics

        Raises:
            BacktestValidationError: If strategy is None or there are no snapshots
            BacktestCancelledError: If cancel_event is set during the run
            PortfolioValuationError: If the portfolio cannot be valued
            StrategyRebalanceError: If the strategy raises
            ActionApplicationError: If an action fails to apply
            MetricsCalculationError: If statistics cannot be derived
            ValueError: If a run is already in progress on this engine
        """
        if strategy is None:
            raise BacktestValidationError("strategy cannot be None")
        if snapshots is None:
            raise BacktestValidationError("snapshots cannot be None")
        snapshot_list = list(snapshots)
        if not snapshot_list:
            raise BacktestValidationError("snapshots cannot be empty")

        self.state_machine.transition_to(EngineState.RUNNING)
        logger.info(
            f"Starting backtest: {len(snapshot_list)} snapshots, "
            f"initial cash {self.config.initial_cash}"
        )

        try:
            result = self._run(strategy, snapshot_list, cancel_event)
        except BacktestError as e:
            self.state_machine.transition_to(EngineState.ABORTED)
            if isinstance(e, BacktestCancelledError):
                logger.warning(f"Backtest cancelled: {e}")
            else:
                logger.error(f"Backtest failed: {e}")
            raise
        except BaseException:
            self.state_machine.transition_to(EngineState.ABORTED)
            raise

        self.state_machine.transition_to(EngineState.COMPLETED)
        logger.info(
            f"Backtest complete: final value {result.final_value}, "
            f"total return {result.total_return:.4%}"
        )
        return result

    def _value(self, portfolio: Portfolio, snapshot: MarketSnapshot, index: int) -> Amount:
        try:
            return portfolio.value(snapshot)
        except Exception as e:
            raise PortfolioValuationError(
                f"failed to calculate portfolio value at snapshot {index}: {e}",
                snapshot_index=index,
            ) from e

    def _run(
        self,
        strategy: Strategy,
        snapshots: list[MarketSnapshot],
        cancel_event: CancelEvent | None,
    ) -> BacktestResult:
        detailed = self.config.detailed_logging
        initial_cash = self.config.initial_cash_amount
        portfolio = Portfolio(initial_cash)
        value_history: list[ValuePoint] = []

        for i, snapshot in enumerate(snapshots):
            if cancel_event is not None and cancel_event.is_set():
                raise BacktestCancelledError(
                    f"backtest cancelled at snapshot {i}", snapshot_index=i
                )

            # Pre-rebalance value is what the strategy observes
            value = self._value(portfolio, snapshot, i)
            value_history.append(ValuePoint(timestamp=snapshot.timestamp, value=value))

            try:
                actions = list(strategy.rebalance(portfolio, snapshot))
            except Exception as e:
                raise StrategyRebalanceError(
                    f"strategy rebalance failed at snapshot {i}: {e}",
                    snapshot_index=i,
                ) from e

            if detailed:
                logger.debug(
                    f"Snapshot {i} @ {snapshot.timestamp.isoformat()}: "
                    f"value={value}, actions={len(actions)}"
                )

            for action_index, action in enumerate(actions):
                try:
                    action.apply(portfolio)
                except Exception as e:
                    raise ActionApplicationError(
                        f"failed to apply action {action_index} at snapshot {i}: {e}",
                        snapshot_index=i,
                        action_index=action_index,
                    ) from e
                if detailed:
                    logger.debug(f"  applied {action}")

        final_value = self._value(portfolio, snapshots[-1], len(snapshots) - 1)

        metrics = MetricsCalculator(initial_cash, final_value, value_history).calculate()

        return BacktestResult(
            initial_value=initial_cash,
            final_value=final_value,
            value_history=tuple(value_history),
            portfolio=portfolio,
            total_return=metrics.total_return,
            annualized_return=metrics.annualized_return,
            sharpe=metrics.sharpe_ratio,
            max_drawdown=metrics.max_drawdown,
            max_drawdown_amount=metrics.max_drawdown_amount,
        )
