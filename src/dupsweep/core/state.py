"""
core/state.py
Run lifecycle: Idle → Enumerating → Hashing → Grouping → AwaitingConfirmation
→ (Deleting →) Done. Done is terminal; there is no way back to confirmation.
"""
from typing import Dict, FrozenSet, Optional

from dupsweep.core.models import RunState
from dupsweep.core.events import EventBus, StageChanged

_TRANSITIONS: Dict[RunState, FrozenSet[RunState]] = {
    RunState.IDLE: frozenset({RunState.ENUMERATING}),
    RunState.ENUMERATING: frozenset({RunState.HASHING, RunState.DONE}),
    RunState.HASHING: frozenset({RunState.GROUPING, RunState.DONE}),
    RunState.GROUPING: frozenset({RunState.AWAITING_CONFIRMATION, RunState.DONE}),
    RunState.AWAITING_CONFIRMATION: frozenset({RunState.DELETING, RunState.DONE}),
    RunState.DELETING: frozenset({RunState.DONE}),
    RunState.DONE: frozenset(),
}


class RunStateMachine:
    def __init__(self, events: Optional[EventBus] = None):
        self.state = RunState.IDLE
        self.events = events or EventBus()

    def advance(self, new_state: RunState) -> None:
        """Moves to new_state, raising RuntimeError on an illegal transition."""
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal run state transition: {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.events.emit(StageChanged(state=new_state))

    @property
    def is_done(self) -> bool:
        return self.state == RunState.DONE
