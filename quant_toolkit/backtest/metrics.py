"""Performance metrics calculator for backtesting results.

All statistics are computed in Decimal under DECIMAL_CONTEXT, including the
fractional power used for annualization and the square roots used for
volatility, so no value passes through a float.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, DecimalException
from typing import Any, Sequence

from quant_toolkit.models.numeric import DECIMAL_CONTEXT, ONE, ZERO, Amount

from .errors import MetricsCalculationError
from .result import ValuePoint

# Seconds in a year, accounting for leap years
SECONDS_PER_YEAR = Decimal("31557600")  # 365.25 * 24 * 60 * 60

# Step returns that differ only by rounding at DECIMAL_CONTEXT precision leave
# a standard deviation far below this; it is treated as zero volatility
VOLATILITY_FLOOR = Decimal("1e-40")


def seconds_between(start: datetime, end: datetime) -> Decimal:
    """Exact length of ``end - start`` in seconds."""
    delta: timedelta = end - start
    return (
        Decimal(delta.days) * Decimal(86400)
        + Decimal(delta.seconds)
        + Decimal(delta.microseconds) / Decimal(1_000_000)
    )


@dataclass(frozen=True)
class PerformanceMetrics:
    """Container for derived performance statistics.

    Attributes:
        total_return: (final - initial) / initial, as a fraction
        annualized_return: Total return scaled to a 365.25-day year
        sharpe_ratio: Annualized mean/stddev of step returns (risk-free rate 0)
        max_drawdown: Largest peak-to-trough decline as a fraction of the peak
        max_drawdown_amount: The same decline in absolute terms
    """

    total_return: Decimal
    annualized_return: Decimal
    sharpe_ratio: Decimal
    max_drawdown: Decimal
    max_drawdown_amount: Amount

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to a JSON-friendly dictionary of decimal strings."""
        return {
            "total_return": str(self.total_return),
            "annualized_return": str(self.annualized_return),
            "sharpe_ratio": str(self.sharpe_ratio),
            "max_drawdown": str(self.max_drawdown),
            "max_drawdown_amount": str(self.max_drawdown_amount),
        }


class MetricsCalculator:
    """Calculator for backtest performance metrics.

    Example:
        >>> calculator = MetricsCalculator(initial, final, history)
        >>> metrics = calculator.calculate()
        >>> metrics.sharpe_ratio
    """

    def __init__(
        self,
        initial_value: Amount,
        final_value: Amount,
        value_history: Sequence[ValuePoint],
    ):
        """Initialize metrics calculator.

        Args:
            initial_value: Portfolio value at the first snapshot
            final_value: Portfolio value after the last rebalance
            value_history: Value samples in snapshot order
        """
        self.initial_value = initial_value
        self.final_value = final_value
        self.value_history = list(value_history)

    def _calculate_total_return(self) -> Decimal:
        initial = self.initial_value.decimal
        final = self.final_value.decimal
        return DECIMAL_CONTEXT.divide(DECIMAL_CONTEXT.subtract(final, initial), initial)

    def _period_seconds(self) -> Decimal:
        start = self.value_history[0].timestamp
        end = self.value_history[-1].timestamp
        return seconds_between(start, end)

    def _calculate_annualized_return(self, total_return: Decimal) -> Decimal:
        """Calculate (1 + total)^(year / period) - 1.

        Raises:
            MetricsCalculationError: If the sampled period is not positive or
                the power overflows
        """
        period = self._period_seconds()
        if period <= 0:
            raise MetricsCalculationError(f"invalid time period: {period} seconds")

        growth = DECIMAL_CONTEXT.add(ONE, total_return)
        if growth.is_zero():
            # Total loss
            return -ONE

        exponent = DECIMAL_CONTEXT.divide(SECONDS_PER_YEAR, period)
        try:
            compounded = DECIMAL_CONTEXT.power(growth, exponent)
        except DecimalException as e:
            raise MetricsCalculationError(
                f"annualized return is not representable: {e!r}"
            ) from e
        return DECIMAL_CONTEXT.subtract(compounded, ONE)

    def _step_returns(self) -> list[Decimal]:
        returns: list[Decimal] = []
        for prev_point, curr_point in zip(self.value_history, self.value_history[1:]):
            prev_value = prev_point.value.decimal
            if prev_value.is_zero():
                continue
            returns.append(
                DECIMAL_CONTEXT.divide(
                    DECIMAL_CONTEXT.subtract(curr_point.value.decimal, prev_value), prev_value
                )
            )
        return returns

    def _calculate_sharpe(self) -> Decimal:
        """Calculate annualized Sharpe ratio from step-to-step returns.

        Uses population standard deviation. Degenerate inputs (fewer than two
        returns, volatility below VOLATILITY_FLOOR) yield 0.

        Returns:
            Sharpe ratio
        """
        returns = self._step_returns()
        if len(returns) < 2:
            return ZERO

        n = Decimal(len(returns))
        total = ZERO
        for r in returns:
            total = DECIMAL_CONTEXT.add(total, r)
        mean = DECIMAL_CONTEXT.divide(total, n)

        variance_sum = ZERO
        for r in returns:
            diff = DECIMAL_CONTEXT.subtract(r, mean)
            variance_sum = DECIMAL_CONTEXT.add(variance_sum, DECIMAL_CONTEXT.multiply(diff, diff))
        variance = DECIMAL_CONTEXT.divide(variance_sum, n)

        std_dev = DECIMAL_CONTEXT.sqrt(variance)
        if std_dev < VOLATILITY_FLOOR:
            return ZERO

        avg_seconds_per_period = DECIMAL_CONTEXT.divide(self._period_seconds(), n)
        periods_per_year = DECIMAL_CONTEXT.divide(SECONDS_PER_YEAR, avg_seconds_per_period)
        annualization = DECIMAL_CONTEXT.sqrt(periods_per_year)

        return DECIMAL_CONTEXT.multiply(DECIMAL_CONTEXT.divide(mean, std_dev), annualization)

    def _calculate_drawdown(self) -> tuple[Decimal, Amount]:
        """Calculate maximum drawdown.

        Returns:
            Tuple of (max_drawdown, max_drawdown_amount)
        """
        max_drawdown = ZERO
        max_drawdown_amount = ZERO
        peak = self.value_history[0].value.decimal

        for point in self.value_history[1:]:
            current = point.value.decimal
            if current > peak:
                peak = current

            if peak > 0:
                drawdown_amount = DECIMAL_CONTEXT.subtract(peak, current)
                drawdown = DECIMAL_CONTEXT.divide(drawdown_amount, peak)
                if drawdown > max_drawdown:
                    max_drawdown = drawdown
                    max_drawdown_amount = drawdown_amount

        return max_drawdown, Amount(max_drawdown_amount)

    def calculate(self) -> PerformanceMetrics:
        """Calculate all performance metrics.

        Returns:
            PerformanceMetrics with all calculated values

        Raises:
            MetricsCalculationError: If the initial value is zero, fewer than
                two samples were recorded, or the sampled period is not positive
        """
        if self.initial_value.is_zero():
            raise MetricsCalculationError("initial value cannot be zero")
        if len(self.value_history) < 2:
            raise MetricsCalculationError(
                "insufficient value history (need at least 2 points)"
            )

        total_return = self._calculate_total_return()
        annualized_return = self._calculate_annualized_return(total_return)
        sharpe_ratio = self._calculate_sharpe()
        max_drawdown, max_drawdown_amount = self._calculate_drawdown()

        return PerformanceMetrics(
            total_return=total_return,
            annualized_return=annualized_return,
            sharpe_ratio=sharpe_ratio,
            max_drawdown=max_drawdown,
            max_drawdown_amount=max_drawdown_amount,
        )
