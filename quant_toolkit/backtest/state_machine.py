"""Backtest run lifecycle with validated transitions."""

from enum import Enum


class EngineState(str, Enum):
    """Lifecycle states of a backtest run."""

    IDLE = "IDLE"  # No run started yet
    RUNNING = "RUNNING"  # Processing snapshots
    COMPLETED = "COMPLETED"  # Finished with a result
    ABORTED = "ABORTED"  # Failed or cancelled


# A finished engine may start another run; there is no pause/resume
VALID_TRANSITIONS: dict[EngineState, list[EngineState]] = {
    EngineState.IDLE: [EngineState.RUNNING],
    EngineState.RUNNING: [EngineState.COMPLETED, EngineState.ABORTED],
    EngineState.COMPLETED: [EngineState.RUNNING],
    EngineState.ABORTED: [EngineState.RUNNING],
}


class EngineStateMachine:
    """Tracks which phase of a run the engine is in."""

    def __init__(self, initial_state: EngineState = EngineState.IDLE):
        """
        Create the lifecycle tracker.

        Args:
            initial_state: State to start in (default: IDLE)
        """
        self._state = initial_state

    @property
    def current_state(self) -> EngineState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        """True once a run has completed or aborted."""
        return self._state in (EngineState.COMPLETED, EngineState.ABORTED)

    def can_transition_to(self, target: EngineState) -> bool:
        """Whether ``target`` is reachable from the current state."""
        return target in VALID_TRANSITIONS[self._state]

    def transition_to(self, target: EngineState) -> None:
        """
        Move to ``target``.

        Args:
            target: Next lifecycle state

        Raises:
            ValueError: If ``target`` is not reachable from the current state
        """
        if not self.can_transition_to(target):
            raise ValueError(f"Invalid transition from {self._state.value} to {target.value}")
        self._state = target
