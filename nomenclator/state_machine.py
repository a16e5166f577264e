from enum import Enum
from typing import List
from dataclasses import dataclass


class RunPhase(str, Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class TransitionError(Exception):
    def __init__(self, from_state: str, to_state: str, reason: str = None):
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason or f"Cannot transition from {from_state} to {to_state}"
        super().__init__(self.reason)


@dataclass
class Transition:
    from_state: RunPhase
    to_state: RunPhase
    action: str


class RunStateMachine:
    TRANSITIONS = [
        Transition(RunPhase.RUNNING, RunPhase.RUNNING, "advance"),
        Transition(RunPhase.RUNNING, RunPhase.STOPPING, "complete"),
        Transition(RunPhase.RUNNING, RunPhase.STOPPING, "stop"),
        Transition(RunPhase.RUNNING, RunPhase.STOPPING, "abort"),
        Transition(RunPhase.STOPPING, RunPhase.STOPPED, "shutdown"),
    ]

    def __init__(self, initial_state: RunPhase = RunPhase.RUNNING):
        self._state = initial_state
        self._history: List[tuple] = []

    @property
    def state(self) -> RunPhase:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == RunPhase.RUNNING

    def transition(self, action: str) -> RunPhase:
        for t in self.TRANSITIONS:
            if t.from_state == self._state and t.action == action:
                old_state = self._state
                self._state = t.to_state
                # Self-loops happen once per pairing; keep history to phase changes.
                if old_state != self._state:
                    self._history.append((old_state, action, self._state))
                return self._state

        raise TransitionError(
            self._state.value,
            "unknown",
            f"No valid transition for action '{action}' from state '{self._state.value}'"
        )

    def get_history(self) -> List[tuple]:
        return self._history.copy()
