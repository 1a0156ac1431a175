"""CHIP-8 rendering utilities for visualization."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple


def unpack_rgba(color: int) -> Tuple[int, int, int, int]:
    """Split an RGBA8888 integer (0xRRGGBBAA) into its four channels.

    Args:
        color: 32-bit colour, red in the most significant byte

    Returns:
        (red, green, blue, alpha) tuple of ints in 0..255
    """
    if not 0 <= color <= 0xFFFFFFFF:
        raise ValueError(f"Colour 0x{color:X} does not fit in 32 bits")
    return (
        (color >> 24) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
    )


def display_to_rgba(
    display: jnp.ndarray,
    scale: int = 20,
    on_color: int = 0xFFFFFFFF,
    off_color: int = 0x000000FF,
) -> np.ndarray:
    """Convert CHIP-8 boolean display to an RGBA array with upscaling.

    Args:
        display: Boolean array of shape (32, 64), indexed [y, x]
        scale: Size in output pixels of one CHIP-8 pixel
        on_color: RGBA8888 colour for lit pixels (default: white)
        off_color: RGBA8888 colour for unlit pixels (default: black)

    Returns:
        Array of shape (32*scale, 64*scale, 4) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"Scale must be at least 1, got {scale}")
    pixels = np.asarray(display, dtype=np.bool_)
    height, width = pixels.shape

    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[pixels] = unpack_rgba(on_color)
    frame[~pixels] = unpack_rgba(off_color)

    # Nearest neighbour upscaling
    if scale > 1:
        frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)

    return frame


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 20,
    on_color: int = 0xFFFFFFFF,
    off_color: int = 0x000000FF,
) -> np.ndarray:
    """Same as ``display_to_rgba`` without the alpha channel."""
    return display_to_rgba(display, scale, on_color, off_color)[..., :3]
