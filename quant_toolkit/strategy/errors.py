"""Errors raised while mutating or valuing a portfolio."""


class PortfolioError(Exception):
    """Base class for portfolio and action failures."""


class DuplicatePositionError(PortfolioError):
    """A position with the same id is already held."""

    def __init__(self, position_id: str):
        super().__init__(f"position {position_id} already exists")
        self.position_id = position_id


class PositionNotFoundError(PortfolioError, LookupError):
    """No position with the requested id is held."""

    def __init__(self, position_id: str):
        super().__init__(f"position not found: {position_id}")
        self.position_id = position_id


class PositionValuationError(PortfolioError):
    """A held position could not be valued against a snapshot."""

    def __init__(self, position_id: str, reason: str):
        super().__init__(f"failed to value position {position_id}: {reason}")
        self.position_id = position_id


class InvalidActionError(PortfolioError, ValueError):
    """An action is malformed and cannot be applied."""


class BatchActionError(PortfolioError):
    """A sub-action of a batch failed.

    Attributes:
        index: Position of the failing sub-action within the batch
        action: The failing sub-action
    """

    def __init__(self, index: int, action: object, reason: str):
        super().__init__(f"batch action failed at step {index} ({action}): {reason}")
        self.index = index
        self.action = action
