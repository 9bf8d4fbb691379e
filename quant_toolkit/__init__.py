"""Event-driven backtesting toolkit for crypto trading strategies.

Example:
    >>> from quant_toolkit import BacktestEngine, EngineConfig
    >>> engine = BacktestEngine(EngineConfig(initial_cash=Decimal("10000")))
    >>> result = engine.run(strategy, snapshots)
    >>> print(result.summary())
"""

from quant_toolkit.backtest import (
    ActionApplicationError,
    BacktestCancelledError,
    BacktestEngine,
    BacktestError,
    BacktestResult,
    BacktestValidationError,
    MetricsCalculationError,
    PortfolioValuationError,
    StrategyRebalanceError,
    ValuePoint,
)
from quant_toolkit.config import EngineConfig, load_config
from quant_toolkit.models import (
    Amount,
    MarketSnapshot,
    Position,
    PositionType,
    Price,
    SimpleSnapshot,
    SpotPosition,
)
from quant_toolkit.strategy import (
    Action,
    AddPositionAction,
    AdjustCashAction,
    BatchAction,
    Portfolio,
    RemovePositionAction,
    ReplacePositionAction,
    Strategy,
    TransactionalBatchAction,
)

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionApplicationError",
    "AddPositionAction",
    "AdjustCashAction",
    "Amount",
    "BacktestCancelledError",
    "BacktestEngine",
    "BacktestError",
    "BacktestResult",
    "BacktestValidationError",
    "BatchAction",
    "EngineConfig",
    "MarketSnapshot",
    "MetricsCalculationError",
    "Portfolio",
    "PortfolioValuationError",
    "Position",
    "PositionType",
    "Price",
    "RemovePositionAction",
    "ReplacePositionAction",
    "SimpleSnapshot",
    "SpotPosition",
    "Strategy",
    "StrategyRebalanceError",
    "TransactionalBatchAction",
    "ValuePoint",
    "load_config",
]
