"""Frame runner driving the CPU clock and the 60 Hz timer clock."""

from chix8.constants import TIMER_FREQUENCY
from chix8.emulator import step
from chix8.state import EmulatorState, tick_timers


def cycles_for_frame(instruction_frequency: int, frame: int, timer_frequency: int = TIMER_FREQUENCY) -> int:
    """Number of instructions to execute in timer frame ``frame``.

    The fractional part of ``instruction_frequency / timer_frequency`` is
    carried from frame to frame, so any ``timer_frequency`` consecutive
    frames run exactly ``instruction_frequency`` instructions.
    """
    return (
        (frame + 1) * instruction_frequency // timer_frequency
        - frame * instruction_frequency // timer_frequency
    )


def run_frame(state: EmulatorState, cycles: int) -> EmulatorState:
    """Run up to ``cycles`` instructions, then tick the timers once.

    Stops executing early when the machine halts or starts waiting for a key.
    Timers keep running while the machine waits for a key, but not while it
    is paused or halted.
    """
    if state.status.is_paused or state.status.is_halted:
        return state

    for _ in range(cycles):
        state = step(state)
        if not state.status.is_running:
            break

    if state.status.is_halted:
        return state
    return tick_timers(state)
