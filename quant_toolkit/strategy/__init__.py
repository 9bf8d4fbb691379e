"""Portfolio accounting, actions and the strategy contract."""

from .actions import (
    Action,
    AddPositionAction,
    AdjustCashAction,
    BatchAction,
    RemovePositionAction,
    ReplacePositionAction,
    TransactionalBatchAction,
)
from .errors import (
    BatchActionError,
    DuplicatePositionError,
    InvalidActionError,
    PortfolioError,
    PositionNotFoundError,
    PositionValuationError,
)
from .interface import Strategy
from .portfolio import Portfolio

__all__ = [
    "Action",
    "AddPositionAction",
    "AdjustCashAction",
    "BatchAction",
    "BatchActionError",
    "DuplicatePositionError",
    "InvalidActionError",
    "Portfolio",
    "PortfolioError",
    "PositionNotFoundError",
    "PositionValuationError",
    "RemovePositionAction",
    "ReplacePositionAction",
    "Strategy",
    "TransactionalBatchAction",
]
