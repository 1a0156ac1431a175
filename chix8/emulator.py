"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chix8.state import EmulatorState, load
from chix8.decode import decode
from chix8.constants import MEMORY_SIZE
from chix8.errors import Chip8Error, MemoryOutOfBounds, RomLoadFailed
from chix8.status import Event, transition
from chix8.instructions.system import execute_system_instruction
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chix8.instructions.alu import execute_alu_operation
from chix8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import execute_misc_instruction

# Indexed by the top nibble of the opcode
INSTRUCTION_TABLE = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    PC is expected to already point past the instruction (see ``fetch``).

    Raises:
        UnknownOpcode: If the instruction is not part of the CHIP-8 set
        StackOverflow: On a call with a full stack
        StackUnderflow: On a return with an empty stack
    """
    decoded_instruction = decode(instruction)
    return INSTRUCTION_TABLE[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryOutOfBounds(pc)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle.

    Paused and halted machines are returned unchanged. Any machine error
    halts the machine with the error as reason; the state is otherwise left
    as it was before the cycle. The keypad seen by a completed cycle is kept
    in ``last_keypad`` for FX0A.
    """
    if state.status.is_paused or state.status.is_halted:
        return state
    try:
        fetched_state, instruction = fetch(state)
        return execute(fetched_state, instruction).replace(last_keypad=state.keypad)
    except Chip8Error as error:
        return state.replace(status=transition(state.status, Event.FAULT, reason=error))


def toggle_pause(state: EmulatorState) -> EmulatorState:
    """Pause a running machine or resume a paused one."""
    return state.replace(status=transition(state.status, Event.TOGGLE_PAUSE))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200.

    Raises:
        RomLoadFailed: If the file cannot be read
        RomTooLarge: If the ROM does not fit in memory
    """
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as error:
        raise RomLoadFailed(str(filename), error) from error
    return load(state, rom_data)
