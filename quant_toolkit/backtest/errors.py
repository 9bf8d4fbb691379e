"""Run-level failures reported by the backtest engine.

Every failure aborts the run; no partial result is returned. The underlying
exception is chained as ``__cause__``.
"""


class BacktestError(Exception):
    """Base class for backtest run failures.

    Attributes:
        snapshot_index: Index of the snapshot being processed, if any
    """

    def __init__(self, message: str, snapshot_index: int | None = None):
        super().__init__(message)
        self.snapshot_index = snapshot_index


class BacktestValidationError(BacktestError, ValueError):
    """Run preconditions violated (missing strategy, no snapshots)."""


class BacktestCancelledError(BacktestError):
    """The caller requested cancellation."""


class PortfolioValuationError(BacktestError):
    """The portfolio could not be valued against a snapshot."""


class StrategyRebalanceError(BacktestError):
    """The strategy raised while deciding actions."""


class ActionApplicationError(BacktestError):
    """An action returned by the strategy failed to apply.

    Attributes:
        action_index: Position of the failing action in the strategy's list
    """

    def __init__(self, message: str, snapshot_index: int, action_index: int):
        super().__init__(message, snapshot_index)
        self.action_index = action_index


class MetricsCalculationError(BacktestError):
    """Performance statistics could not be derived from the value history."""
