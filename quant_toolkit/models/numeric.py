"""Decimal-backed money types for precision-safe accounting.

All cash, position and portfolio values flow through ``Decimal``. ``Amount``
(a quantity) and ``Price`` (a unit price) are non-negative by construction;
any operation that would make them negative raises instead of clamping.

Example:
    >>> qty = Amount.of("2.5")
    >>> px = Price.of(3000)
    >>> qty * px
    Amount('7500.0')
"""

from dataclasses import dataclass
from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Union

# Shared arithmetic context so results do not depend on the caller's
# thread-local decimal context.
DECIMAL_CONTEXT = Context(
    prec=50,
    rounding=ROUND_HALF_EVEN,
    traps=[DivisionByZero, InvalidOperation, Overflow],
)

ZERO = Decimal(0)
ONE = Decimal(1)

DecimalLike = Union[Decimal, int, str, float]


class NegativeAmountError(ValueError):
    """Raised when an Amount would become negative."""


class NegativePriceError(ValueError):
    """Raised when a Price would become negative."""


class InvalidDecimalError(ValueError):
    """Raised when a value cannot be parsed as a finite decimal."""


class DivisionByZeroError(ZeroDivisionError):
    """Raised when dividing a decimal value by zero."""


def to_decimal(value: DecimalLike) -> Decimal:
    """Convert a value to a finite ``Decimal``.

    Floats are converted through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Args:
        value: Decimal, int, numeric string or float

    Returns:
        Equivalent Decimal

    Raises:
        InvalidDecimalError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidDecimalError(f"invalid decimal value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise InvalidDecimalError(f"invalid decimal value: {value!r}") from e
    else:
        raise InvalidDecimalError(f"invalid decimal value: {value!r}")

    if not result.is_finite():
        raise InvalidDecimalError(f"invalid decimal value: {value!r}")
    return result


def safe_div(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide two decimals under the shared context.

    Raises:
        DivisionByZeroError: If denominator is zero
    """
    if denominator == 0:
        raise DivisionByZeroError("division by zero")
    return DECIMAL_CONTEXT.divide(numerator, denominator)


@dataclass(frozen=True, order=True)
class Price:
    """Unit price of an asset. Never negative."""

    value: Decimal

    def __post_init__(self) -> None:
        """Normalize to Decimal and validate sign."""
        value = to_decimal(self.value)
        if value < 0:
            raise NegativePriceError(f"price cannot be negative: {value}")
        object.__setattr__(self, "value", value)

    @classmethod
    def of(cls, value: DecimalLike) -> "Price":
        """Build a Price from any decimal-like value."""
        return cls(to_decimal(value))

    @classmethod
    def zero(cls) -> "Price":
        """Zero price."""
        return cls(ZERO)

    @property
    def decimal(self) -> Decimal:
        """Underlying decimal value."""
        return self.value

    def is_zero(self) -> bool:
        return self.value == 0

    def __add__(self, other: "Price") -> "Price":
        if not isinstance(other, Price):
            return NotImplemented
        return Price(DECIMAL_CONTEXT.add(self.value, other.value))

    def __sub__(self, other: "Price") -> "Price":
        if not isinstance(other, Price):
            return NotImplemented
        result = DECIMAL_CONTEXT.subtract(self.value, other.value)
        if result < 0:
            raise NegativePriceError(f"price subtraction went negative: {self} - {other}")
        return Price(result)

    def __mul__(self, other: object) -> "Price | Amount":
        if isinstance(other, Amount):
            return Amount(DECIMAL_CONTEXT.multiply(other.value, self.value))
        if isinstance(other, (Decimal, int)) and not isinstance(other, bool):
            return Price(DECIMAL_CONTEXT.multiply(self.value, Decimal(other)))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: Decimal | int) -> "Price":
        if not isinstance(divisor, (Decimal, int)) or isinstance(divisor, bool):
            return NotImplemented
        return Price(safe_div(self.value, Decimal(divisor)))

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Price('{self.value}')"


@dataclass(frozen=True, order=True)
class Amount:
    """Quantity of an asset or of the portfolio's denomination. Never negative."""

    value: Decimal

    def __post_init__(self) -> None:
        """Normalize to Decimal and validate sign."""
        value = to_decimal(self.value)
        if value < 0:
            raise NegativeAmountError(f"amount cannot be negative: {value}")
        object.__setattr__(self, "value", value)

    @classmethod
    def of(cls, value: DecimalLike) -> "Amount":
        """Build an Amount from any decimal-like value."""
        return cls(to_decimal(value))

    @classmethod
    def zero(cls) -> "Amount":
        """Zero amount."""
        return cls(ZERO)

    @property
    def decimal(self) -> Decimal:
        """Underlying decimal value."""
        return self.value

    def is_zero(self) -> bool:
        return self.value == 0

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(DECIMAL_CONTEXT.add(self.value, other.value))

    def __sub__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        result = DECIMAL_CONTEXT.subtract(self.value, other.value)
        if result < 0:
            raise NegativeAmountError(f"amount subtraction went negative: {self} - {other}")
        return Amount(result)

    def __mul__(self, other: object) -> "Amount":
        # Price * Amount cancels the unit and yields an Amount
        if isinstance(other, Price):
            return Amount(DECIMAL_CONTEXT.multiply(self.value, other.value))
        if isinstance(other, (Decimal, int)) and not isinstance(other, bool):
            return Amount(DECIMAL_CONTEXT.multiply(self.value, Decimal(other)))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> "Amount":
        if isinstance(divisor, Price):
            return Amount(safe_div(self.value, divisor.value))
        if isinstance(divisor, (Decimal, int)) and not isinstance(divisor, bool):
            return Amount(safe_div(self.value, Decimal(divisor)))
        return NotImplemented

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Amount('{self.value}')"
