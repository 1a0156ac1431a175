"""Run a ROM without a window and print the screen as text."""

import argparse

import jax

from chix8 import create_state, load_rom, run_frame, cycles_for_frame, framebuffer_snapshot
from chix8.constants import DEFAULT_INSTRUCTION_FREQUENCY


def render_text(state) -> str:
    return "\n".join("".join("#" if pixel else "." for pixel in row) for row in framebuffer_snapshot(state))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("rom")
    parser.add_argument("--frames", type=int, default=120, help="60 Hz frames to run")
    parser.add_argument("--frequency", type=int, default=DEFAULT_INSTRUCTION_FREQUENCY)
    args = parser.parse_args()

    state = load_rom(create_state(jax.random.PRNGKey(0)), args.rom)
    for frame in range(args.frames):
        state = run_frame(state, cycles_for_frame(args.frequency, frame))
        if state.status.is_halted:
            break

    print(render_text(state))
    print(f"status: {state.status}")
