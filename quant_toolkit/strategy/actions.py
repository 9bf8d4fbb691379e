"""Actions: declared, single-shot mutations of a portfolio.

Strategies return actions from ``rebalance``; the engine applies them in
order. Each concrete action is immutable and validates its own inputs when
applied.

Batch semantics:
    ``BatchAction`` stops at the first failing sub-action and does NOT roll
    back the sub-actions applied before it. ``TransactionalBatchAction``
    restores the portfolio to its pre-batch state before raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal

from quant_toolkit.models.numeric import to_decimal
from quant_toolkit.models.position import Position
from quant_toolkit.strategy.errors import BatchActionError, InvalidActionError
from quant_toolkit.strategy.portfolio import Portfolio


class Action(ABC):
    """Abstract interface for portfolio mutations."""

    @abstractmethod
    def apply(self, portfolio: Portfolio) -> None:
        """
        Apply this action to a portfolio.

        Args:
            portfolio: Portfolio to mutate

        Raises:
            PortfolioError: If the action cannot be applied
        """
        ...

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description used in logs."""
        ...

    def __str__(self) -> str:
        return self.describe()


def _require_portfolio(portfolio: Portfolio | None) -> Portfolio:
    if portfolio is None:
        raise InvalidActionError("portfolio cannot be None")
    return portfolio


@dataclass(frozen=True)
class AddPositionAction(Action):
    """Add a new position."""

    position: Position

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        if self.position is None:
            raise InvalidActionError("cannot add None position")
        portfolio.add_position(self.position)

    def describe(self) -> str:
        if self.position is None:
            return "AddPosition(None)"
        return f"AddPosition({self.position.id})"


@dataclass(frozen=True)
class RemovePositionAction(Action):
    """Remove a position by id."""

    position_id: str

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        if not self.position_id:
            raise InvalidActionError("position id cannot be empty")
        portfolio.remove_position(self.position_id)

    def describe(self) -> str:
        return f"RemovePosition({self.position_id})"


@dataclass(frozen=True)
class ReplacePositionAction(Action):
    """Swap an existing position for a new one (e.g. re-ranging an LP, rolling an option).

    Applied as remove-then-add. If the add fails, the old position is not
    restored.
    """

    old_position_id: str
    new_position: Position

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        if not self.old_position_id:
            raise InvalidActionError("old position id cannot be empty")
        if self.new_position is None:
            raise InvalidActionError("new position cannot be None")
        portfolio.replace_position(self.old_position_id, self.new_position)

    def describe(self) -> str:
        new_id = self.new_position.id if self.new_position is not None else "None"
        return f"ReplacePosition({self.old_position_id} -> {new_id})"


@dataclass(frozen=True)
class AdjustCashAction(Action):
    """Add (positive delta) or remove (negative delta) cash."""

    delta: Decimal
    reason: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "delta", to_decimal(self.delta))

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        portfolio.adjust_cash(self.delta)

    def describe(self) -> str:
        if self.reason:
            return f"AdjustCash({self.delta}, reason: {self.reason})"
        return f"AdjustCash({self.delta})"


@dataclass(frozen=True)
class BatchAction(Action):
    """Apply several actions in sequence as one logical step.

    Stops at the first failure and raises ``BatchActionError`` carrying the
    failing index. Sub-actions applied before the failure remain applied.
    """

    actions: tuple[Action, ...] = field(default_factory=tuple)

    def __init__(self, *actions: Action):
        object.__setattr__(self, "actions", tuple(actions))

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        for index, action in enumerate(self.actions):
            try:
                action.apply(portfolio)
            except Exception as e:
                raise BatchActionError(index, action, str(e)) from e

    def describe(self) -> str:
        return f"{type(self).__name__}({len(self.actions)} actions)"


class TransactionalBatchAction(BatchAction):
    """All-or-nothing variant of ``BatchAction``.

    The portfolio is cloned before the first sub-action; on failure the clone
    is swapped back in before the error is raised.
    """

    def apply(self, portfolio: Portfolio) -> None:
        portfolio = _require_portfolio(portfolio)
        checkpoint = portfolio.clone()
        try:
            super().apply(portfolio)
        except BatchActionError:
            portfolio.restore(checkpoint)
            raise
