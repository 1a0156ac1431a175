"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, PyTreeNode, field

from chix8.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
    MEMORY_SIZE, MAX_PROGRAM_SIZE, NUM_KEYS, NUM_REGISTERS,
)
from chix8.errors import RomTooLarge, InvalidKeyIndex
from chix8.status import MachineStatus, RUNNING


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The display is row-major: ``display[y, x]``.
    """
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    last_keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    status: MachineStatus = field(pytree_node=False, default=RUNNING)
    shift_uses_vy: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(rng)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def load(state: EmulatorState, program: bytes) -> EmulatorState:
    """Reset the machine and copy ``program`` into memory at 0x200.

    Every register, the stack, both timers, the display and the keypad are
    cleared and the font is reloaded. Only the RNG key and the shift quirk
    survive from ``state``.

    Raises:
        RomTooLarge: If the program does not fit between 0x200 and the end of memory
    """
    if len(program) > MAX_PROGRAM_SIZE:
        raise RomTooLarge(len(program), MAX_PROGRAM_SIZE)

    fresh = create_state(state.rng).replace(shift_uses_vy=state.shift_uses_vy)
    if not program:
        return fresh
    program_array = jnp.array(list(program), dtype=jnp.uint8)
    return fresh.replace(
        memory=fresh.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    )


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, stopping at zero. Driven at 60 Hz."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Set the pressed state of keypad key ``index`` (0x0-0xF)."""
    if not 0 <= index < NUM_KEYS:
        raise InvalidKeyIndex(index)
    return state.replace(keypad=state.keypad.at[index].set(bool(pressed)))


def framebuffer_snapshot(state: EmulatorState) -> np.ndarray:
    """Read-only (32, 64) boolean view of the display."""
    snapshot = np.asarray(state.display)
    if snapshot.flags.writeable:
        snapshot = snapshot.view()
        snapshot.flags.writeable = False
    return snapshot


def is_sound_on(state: EmulatorState) -> bool:
    """True while the sound timer is non-zero."""
    return int(state.sound_timer) > 0
