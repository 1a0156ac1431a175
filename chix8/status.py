"""Machine status: a tagged phase plus an explicit transition function."""

import enum
from dataclasses import dataclass, field
from typing import Optional

from chix8.errors import Chip8Error, InvalidTransition


class Phase(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    AWAITING_KEY = "awaiting_key"
    HALTED = "halted"


class Event(enum.Enum):
    TOGGLE_PAUSE = "toggle_pause"
    WAIT_FOR_KEY = "wait_for_key"
    KEY_PRESSED = "key_pressed"
    FAULT = "fault"


@dataclass(frozen=True)
class MachineStatus:
    """Current phase of the machine.

    Attributes:
        phase: Which of the four phases the machine is in
        reason: Error that halted the machine (HALTED only)
        held_keys: Keys already down when FX0A started waiting (AWAITING_KEY only)
        resume: Status to restore when a pause ends (PAUSED only)
    """
    phase: Phase = Phase.RUNNING
    reason: Optional[Chip8Error] = None
    held_keys: frozenset = field(default_factory=frozenset)
    resume: Optional["MachineStatus"] = None

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def is_awaiting_key(self) -> bool:
        return self.phase is Phase.AWAITING_KEY

    @property
    def is_halted(self) -> bool:
        return self.phase is Phase.HALTED

    def __str__(self) -> str:
        if self.is_halted:
            return f"halted: {self.reason}"
        return self.phase.value


RUNNING = MachineStatus()


def transition(
    status: MachineStatus,
    event: Event,
    reason: Optional[Chip8Error] = None,
    held_keys: frozenset = frozenset(),
) -> MachineStatus:
    """Apply an event to a status and return the next status.

    HALTED is terminal and absorbs every event. Pairs without a defined
    transition raise InvalidTransition.
    """
    if status.is_halted:
        return status

    if event is Event.FAULT:
        return MachineStatus(Phase.HALTED, reason=reason)

    if event is Event.TOGGLE_PAUSE:
        if status.is_paused:
            return status.resume
        return MachineStatus(Phase.PAUSED, resume=status)

    if event is Event.WAIT_FOR_KEY and (status.is_running or status.is_awaiting_key):
        return MachineStatus(Phase.AWAITING_KEY, held_keys=frozenset(held_keys))

    if event is Event.KEY_PRESSED and status.is_awaiting_key:
        return RUNNING

    raise InvalidTransition(f"{event.value} is not valid while {status.phase.value}")
