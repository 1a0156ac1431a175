"""CHIP-8 display operations."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, ADDRESS_MASK

SPRITE_WIDTH = 8
# Bit shift for each sprite column, most significant bit first
column_shifts = jnp.arange(SPRITE_WIDTH - 1, -1, -1)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Sprites wrap around both screen edges. VF is set when any lit pixel is
    turned off. I is left unchanged.
    """
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])

    rows = jnp.arange(instruction.n)
    addresses = (state.I.astype(jnp.int32) + rows) & ADDRESS_MASK
    sprite_bytes = state.memory[addresses].astype(jnp.int32)
    bits = ((sprite_bytes[:, None] >> column_shifts[None, :]) & 1).astype(jnp.bool_)

    ys = (sprite_y + rows) % SCREEN_HEIGHT
    xs = (sprite_x + jnp.arange(SPRITE_WIDTH)) % SCREEN_WIDTH
    sprite = jnp.zeros_like(state.display).at[ys[:, None], xs[None, :]].set(bits)

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[15].set(jnp.any(state.display & sprite).astype(jnp.uint8))
    )
