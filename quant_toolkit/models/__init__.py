"""Data models for money, market snapshots and positions."""

from .numeric import (
    Amount,
    DivisionByZeroError,
    InvalidDecimalError,
    NegativeAmountError,
    NegativePriceError,
    Price,
    safe_div,
    to_decimal,
)
from .position import Position, PositionType, SpotPosition
from .snapshot import MarketSnapshot, PriceNotAvailableError, SimpleSnapshot, pair_key

__all__ = [
    "Amount",
    "DivisionByZeroError",
    "InvalidDecimalError",
    "MarketSnapshot",
    "NegativeAmountError",
    "NegativePriceError",
    "Position",
    "PositionType",
    "Price",
    "PriceNotAvailableError",
    "SimpleSnapshot",
    "SpotPosition",
    "pair_key",
    "safe_div",
    "to_decimal",
]
