import pytest

from client.state import (
    GenerationInProgressError,
    GenerationState,
    GenerationStateMachine,
    InvalidTransitionError,
)


def test_starts_idle() -> None:
    machine = GenerationStateMachine()

    assert machine.state is GenerationState.IDLE
    assert machine.is_loading is False


@pytest.mark.parametrize("finish", ["succeed", "fail"])
def test_cycle_reaches_one_terminal_state_and_can_restart(finish: str) -> None:
    machine = GenerationStateMachine()

    machine.start()
    assert machine.is_loading
    getattr(machine, finish)()
    assert machine.state in (GenerationState.READY, GenerationState.FAILED)

    machine.start()
    assert machine.state is GenerationState.LOADING


def test_start_while_loading_is_rejected() -> None:
    machine = GenerationStateMachine()
    machine.start()

    with pytest.raises(GenerationInProgressError):
        machine.start()


def test_terminal_transitions_require_loading() -> None:
    machine = GenerationStateMachine()

    with pytest.raises(InvalidTransitionError) as excinfo:
        machine.succeed()
    assert excinfo.value.current is GenerationState.IDLE

    machine.start()
    machine.fail()
    with pytest.raises(InvalidTransitionError):
        machine.succeed()
