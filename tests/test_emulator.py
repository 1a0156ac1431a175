"""Tests for the fetch-decode-execute cycle."""

import jax.numpy as jnp
import pytest
from chix8 import (
    load, load_rom, fetch, step, toggle_pause, set_key, decode,
    MemoryOutOfBounds, RomLoadFailed, RomTooLarge, StackOverflow, UnknownOpcode,
    StackUnderflow, Phase,
)


def program(*instructions):
    """Assemble 16-bit words into ROM bytes."""
    return b"".join(i.to_bytes(2, "big") for i in instructions)


class TestDecode:

    def test_decode_fields(self):
        instruction = decode(0xD7A3)
        assert instruction.opcode == 0xD
        assert instruction.x == 0x7
        assert instruction.y == 0xA
        assert instruction.n == 0x3
        assert instruction.nn == 0xA3
        assert instruction.nnn == 0x7A3
        assert instruction.raw == 0xD7A3


class TestFetch:

    def test_fetch_big_endian_and_advance(self, fresh_state):
        state = load(fresh_state, program(0x1234))
        state, instruction = fetch(state)
        assert instruction == 0x1234
        assert state.pc == 0x202

    @pytest.mark.parametrize("pc", [0xFFF, 0x1000, 0xFFFF])
    def test_fetch_out_of_bounds(self, fresh_state, pc):
        state = fresh_state.replace(pc=jnp.astype(pc, jnp.uint16))
        with pytest.raises(MemoryOutOfBounds) as excinfo:
            fetch(state)
        assert excinfo.value.address == pc

    def test_fetch_last_word(self, fresh_state):
        state = fresh_state.replace(pc=jnp.astype(0xFFE, jnp.uint16))
        state, _ = fetch(state)
        assert state.pc == 0x1000


class TestStep:

    def test_step_runs_program(self, fresh_state):
        state = load(fresh_state, program(0x6005, 0x7003, 0xA123))
        for _ in range(3):
            state = step(state)
        assert state.V[0] == 8
        assert state.I == 0x123
        assert state.pc == 0x206

    def test_call_then_return(self, fresh_state):
        """00EE after 2NNN resumes right after the call."""
        state = load(fresh_state, program(0x2206, 0x6001, 0x0000, 0x00EE))
        state = step(state)
        assert state.pc == 0x206
        state = step(state)
        assert state.pc == 0x202
        state = step(state)
        assert state.V[0] == 1

    def test_seventeen_calls_halt_with_overflow(self, fresh_state):
        """A subroutine calling itself overflows on the 17th call."""
        state = load(fresh_state, program(0x2200))
        for _ in range(16):
            state = step(state)
            assert state.status.is_running
        state = step(state)
        assert state.status.is_halted
        assert isinstance(state.status.reason, StackOverflow)
        assert state.stack.pointer == 16

    def test_unknown_opcode_halts(self, fresh_state):
        state = load(fresh_state, program(0x6001, 0x5121))
        state = step(step(state))
        assert state.status.phase is Phase.HALTED
        assert isinstance(state.status.reason, UnknownOpcode)
        assert state.status.reason.opcode == 0x5121
        # State before the failing cycle is kept
        assert state.pc == 0x202
        assert state.V[0] == 1

    def test_halted_is_terminal(self, fresh_state):
        state = load(fresh_state, program(0x00EE, 0x6001))
        state = step(state)
        assert isinstance(state.status.reason, StackUnderflow)
        halted = step(state)
        assert halted.pc == state.pc
        assert halted.V[0] == 0
        assert toggle_pause(halted).status.is_halted

    def test_run_off_end_of_memory_halts(self, fresh_state):
        state = fresh_state.replace(pc=jnp.astype(0xFFF, jnp.uint16))
        state = step(state)
        assert isinstance(state.status.reason, MemoryOutOfBounds)


class TestPause:

    def test_paused_machine_does_not_step(self, fresh_state):
        state = toggle_pause(load(fresh_state, program(0x6001)))
        assert state.status.is_paused
        state = step(state)
        assert state.pc == 0x200
        assert state.V[0] == 0

    def test_resume(self, fresh_state):
        state = toggle_pause(toggle_pause(load(fresh_state, program(0x6001))))
        assert state.status.is_running
        assert step(state).V[0] == 1

    def test_pause_while_waiting_for_key(self, fresh_state):
        state = step(load(fresh_state, program(0xF20A)))
        assert state.status.is_awaiting_key
        state = toggle_pause(state)
        assert state.status.is_paused
        state = toggle_pause(state)
        assert state.status.is_awaiting_key


class TestWaitForKey:

    def test_awaiting_key_across_cycles(self, fresh_state):
        state = load(fresh_state, program(0xF20A, 0x6101))
        for _ in range(5):
            state = step(state)
            assert state.status.is_awaiting_key
            assert state.pc == 0x200

        state = set_key(state, 0xB, True)
        state = step(state)
        assert state.status.is_running
        assert state.V[2] == 0xB
        assert state.pc == 0x202

        state = step(state)
        assert state.V[1] == 1

    def test_key_pressed_just_before_wait(self, fresh_state):
        state = load(fresh_state, program(0x6000, 0xF20A))
        state = step(state)
        state = set_key(state, 7, True)
        state = step(state)
        assert state.status.is_running
        assert state.V[2] == 7
        assert state.pc == 0x204

    def test_key_held_across_cycles_before_wait(self, fresh_state):
        state = load(fresh_state, program(0x6000, 0xF20A))
        state = set_key(state, 5, True)
        state = step(state)
        state = step(state)
        assert state.status.is_awaiting_key
        assert state.status.held_keys == frozenset({5})
        assert state.pc == 0x202


class TestLoadRom:

    def test_load_rom_file(self, tmp_path, fresh_state):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(program(0x00E0, 0x1200))
        state = load_rom(fresh_state, str(rom))
        assert state.memory[0x200] == 0x00
        assert state.memory[0x201] == 0xE0
        assert state.memory[0x203] == 0x00
        assert state.memory[0x202] == 0x12

    def test_missing_rom(self, tmp_path, fresh_state):
        with pytest.raises(RomLoadFailed) as excinfo:
            load_rom(fresh_state, str(tmp_path / "missing.ch8"))
        assert "missing.ch8" in str(excinfo.value)

    def test_rom_directory_fails(self, tmp_path, fresh_state):
        with pytest.raises(RomLoadFailed):
            load_rom(fresh_state, str(tmp_path))

    def test_oversized_rom_file(self, tmp_path, fresh_state):
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes(4000))
        with pytest.raises(RomTooLarge):
            load_rom(fresh_state, str(rom))
