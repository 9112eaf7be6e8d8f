"""Generation state machine for the client session."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class GenerationState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class InvalidTransitionError(RuntimeError):
    """Raised when a generation cycle is driven out of order."""

    def __init__(self, current: GenerationState, target: GenerationState):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move from {current.value} to {target.value}")


class GenerationInProgressError(InvalidTransitionError):
    """Raised when a new generation is started while one is still loading."""

    def __init__(self) -> None:
        super().__init__(GenerationState.LOADING, GenerationState.LOADING)


_TRANSITIONS: Dict[GenerationState, FrozenSet[GenerationState]] = {
    GenerationState.IDLE: frozenset({GenerationState.LOADING}),
    GenerationState.LOADING: frozenset({GenerationState.READY, GenerationState.FAILED}),
    GenerationState.READY: frozenset({GenerationState.LOADING}),
    GenerationState.FAILED: frozenset({GenerationState.LOADING}),
}


class GenerationStateMachine:
    """Idle -> Loading -> Ready | Failed, with re-entry from either terminal state.

    Each cycle entered with :meth:`start` ends in exactly one of
    :meth:`succeed` or :meth:`fail`. Starting while loading is rejected.
    """

    def __init__(self) -> None:
        self._state = GenerationState.IDLE

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is GenerationState.LOADING

    def start(self) -> None:
        if self.is_loading:
            raise GenerationInProgressError()
        self._transition(GenerationState.LOADING)

    def succeed(self) -> None:
        self._transition(GenerationState.READY)

    def fail(self) -> None:
        self._transition(GenerationState.FAILED)

    def _transition(self, target: GenerationState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidTransitionError(self._state, target)
        self._state = target


__all__ = [
    "GenerationInProgressError",
    "GenerationState",
    "GenerationStateMachine",
    "InvalidTransitionError",
]
