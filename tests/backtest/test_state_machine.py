"""Unit tests for the engine run state machine."""

import pytest

from quant_toolkit.backtest.state_machine import EngineState, EngineStateMachine


def test_initial_state() -> None:
    """Test state machine starts in IDLE."""
    sm = EngineStateMachine()
    assert sm.current_state == EngineState.IDLE
    assert not sm.is_terminal


def test_valid_lifecycle() -> None:
    """Test IDLE -> RUNNING -> COMPLETED -> RUNNING -> ABORTED."""
    sm = EngineStateMachine()
    sm.transition_to(EngineState.RUNNING)
    sm.transition_to(EngineState.COMPLETED)
    assert sm.is_terminal

    sm.transition_to(EngineState.RUNNING)
    sm.transition_to(EngineState.ABORTED)
    assert sm.current_state == EngineState.ABORTED


@pytest.mark.parametrize(
    ("start", "target"),
    [
        (EngineState.IDLE, EngineState.COMPLETED),
        (EngineState.IDLE, EngineState.ABORTED),
        (EngineState.RUNNING, EngineState.RUNNING),
        (EngineState.RUNNING, EngineState.IDLE),
        (EngineState.COMPLETED, EngineState.ABORTED),
    ],
)
def test_invalid_transitions(start: EngineState, target: EngineState) -> None:
    """Test invalid transitions raise ValueError and leave the state unchanged."""
    sm = EngineStateMachine(initial_state=start)
    assert not sm.can_transition_to(target)

    with pytest.raises(ValueError, match="Invalid transition"):
        sm.transition_to(target)

    assert sm.current_state == start


def test_can_transition_to() -> None:
    """Test can_transition_to without changing state."""
    sm = EngineStateMachine()
    assert sm.can_transition_to(EngineState.RUNNING)
    assert sm.current_state == EngineState.IDLE
