"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FONT_START, FONT_GLYPH_SIZE, ADDRESS_MASK, NUM_KEYS
from chix8.errors import UnknownOpcode
from chix8.status import Event, transition


def _addresses(state: EmulatorState, count: int) -> jnp.ndarray:
    """``count`` consecutive addresses from I, wrapped to 12 bits."""
    return (state.I.astype(jnp.int32) + jnp.arange(count)) & ADDRESS_MASK


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register (16-bit, VF untouched)."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Completes only when a key goes down after the wait began. Keys that were
    already down on the previous cycle have to be released first; a key that
    went down since then counts. Until then PC is rewound onto this
    instruction and the machine reports AWAITING_KEY.
    """
    pressed = {key for key in range(NUM_KEYS) if bool(state.keypad[key])}

    if state.status.is_awaiting_key:
        held = state.status.held_keys & pressed
    else:
        held = frozenset(key for key in pressed if bool(state.last_keypad[key]))

    new_presses = sorted(pressed - held)
    if new_presses:
        return state.replace(
            V=state.V.at[instruction.x].set(new_presses[0]),
            status=transition(state.status, Event.KEY_PRESSED),
        )

    return state.replace(
        pc=state.pc - 2,
        status=transition(state.status, Event.WAIT_FOR_KEY, held_keys=held),
    )


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[_addresses(state, 3)].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = state.memory.at[_addresses(state, count)].set(state.V[:count])
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    new_V = state.V.at[:count].set(state.memory[_addresses(state, count)])
    return state.replace(V=new_V)


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
