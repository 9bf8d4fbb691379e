"""Backtest outcome: value history, final portfolio and derived statistics."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

import pandas as pd

from quant_toolkit.models.numeric import Amount
from quant_toolkit.strategy.portfolio import Portfolio

_HUNDRED = Decimal(100)


@dataclass(frozen=True)
class ValuePoint:
    """Portfolio value observed at a snapshot, before that snapshot's rebalance."""

    timestamp: datetime
    value: Amount


@dataclass(frozen=True)
class BacktestResult:
    """Complete outcome of one backtest run.

    Attributes:
        initial_value: Portfolio value at the first snapshot
        final_value: Portfolio value after the last snapshot's rebalance
        value_history: One ValuePoint per snapshot, in snapshot order
        portfolio: Portfolio state after the run
        total_return: (final - initial) / initial
        annualized_return: Total return scaled to a 365.25-day year
        sharpe: Annualized Sharpe ratio, risk-free rate 0
        max_drawdown: Largest peak-to-trough decline as a fraction
        max_drawdown_amount: Largest peak-to-trough decline in absolute terms
    """

    initial_value: Amount
    final_value: Amount
    value_history: tuple[ValuePoint, ...]
    portfolio: Portfolio = field(compare=False, repr=False)
    total_return: Decimal
    annualized_return: Decimal
    sharpe: Decimal
    max_drawdown: Decimal
    max_drawdown_amount: Amount

    @property
    def data_points(self) -> int:
        return len(self.value_history)

    def summary(self) -> str:
        """Human-readable multi-line report."""
        return (
            "Backtest Results:\n"
            f"  Initial Value: {self.initial_value}\n"
            f"  Final Value: {self.final_value}\n"
            f"  Total Return: {self.total_return * _HUNDRED:.2f}%\n"
            f"  Annualized Return: {self.annualized_return * _HUNDRED:.2f}%\n"
            f"  Sharpe Ratio: {self.sharpe:.2f}\n"
            f"  Max Drawdown: {self.max_drawdown * _HUNDRED:.2f}% ({self.max_drawdown_amount})\n"
            f"  Data Points: {self.data_points}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for JSON serialization.

        Decimals are rendered as strings so no precision is lost.
        """
        return {
            "initial_value": str(self.initial_value),
            "final_value": str(self.final_value),
            "total_return": str(self.total_return),
            "annualized_return": str(self.annualized_return),
            "sharpe": str(self.sharpe),
            "max_drawdown": str(self.max_drawdown),
            "max_drawdown_amount": str(self.max_drawdown_amount),
            "data_points": self.data_points,
            "start_time": self.value_history[0].timestamp.isoformat() if self.value_history else None,
            "end_time": self.value_history[-1].timestamp.isoformat() if self.value_history else None,
            "value_history": [
                {"timestamp": p.timestamp.isoformat(), "value": str(p.value)}
                for p in self.value_history
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert result to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_dataframe(self) -> pd.DataFrame:
        """Value history as a DataFrame indexed by timestamp.

        The ``value`` column holds Decimal objects; convert with
        ``df["value"].astype(float)`` for plotting.
        """
        df = pd.DataFrame(
            {"value": [p.value.decimal for p in self.value_history]},
            index=pd.Index([p.timestamp for p in self.value_history], name="timestamp"),
        )
        return df
