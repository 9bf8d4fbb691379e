"""Event-driven backtesting engine.

Replays chronologically ordered market snapshots through a strategy and
derives performance statistics from the portfolio's value history.

Key Components:
    - BacktestEngine: The snapshot loop (value, rebalance, apply actions)
    - EngineStateMachine: Run lifecycle (IDLE, RUNNING, COMPLETED, ABORTED)
    - MetricsCalculator: Total/annualized return, Sharpe, max drawdown
    - BacktestResult: Value history plus derived statistics

Example:
    >>> from quant_toolkit.backtest import BacktestEngine
    >>> engine = BacktestEngine()
    >>> result = engine.run(strategy, snapshots)
    >>> print(f"Total Return: {result.total_return * 100:.2f}%")
"""

from quant_toolkit.backtest.engine import BacktestEngine
from quant_toolkit.backtest.errors import (
    ActionApplicationError,
    BacktestCancelledError,
    BacktestError,
    BacktestValidationError,
    MetricsCalculationError,
    PortfolioValuationError,
    StrategyRebalanceError,
)
from quant_toolkit.backtest.metrics import MetricsCalculator, PerformanceMetrics
from quant_toolkit.backtest.result import BacktestResult, ValuePoint
from quant_toolkit.backtest.state_machine import EngineState, EngineStateMachine

__all__ = [
    "ActionApplicationError",
    "BacktestCancelledError",
    "BacktestEngine",
    "BacktestError",
    "BacktestResult",
    "BacktestValidationError",
    "EngineState",
    "EngineStateMachine",
    "MetricsCalculationError",
    "MetricsCalculator",
    "PerformanceMetrics",
    "PortfolioValuationError",
    "StrategyRebalanceError",
    "ValuePoint",
]
