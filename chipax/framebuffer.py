"""CHIP-8 logical framebuffer.

The display is a boolean array indexed as `display[x, y]`, shape
`(width, height)`.
"""

import numpy as np
import jax.numpy as jnp

from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT

# Bit column offsets of a sprite row, most significant bit first
_COLUMNS = jnp.arange(8)


def create_display(width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> jnp.ndarray:
    return jnp.zeros((width, height), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Unlight every pixel."""
    return jnp.zeros_like(display)


def draw_sprite(display: jnp.ndarray, x: int, y: int, rows: jnp.ndarray) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite into the display with wraparound on both axes.

    Args:
        display: Current display.
        x, y: Top-left coordinate of the sprite (wrapped).
        rows: Sprite bytes, one per row, most significant bit leftmost.

    Returns:
        The new display, and whether any lit pixel was turned off. Sprite
        bits that wrap onto the same pixel are XORed in one at a time, so a
        pixel hit twice turns off even if it started unlit.
    """
    width, height = display.shape
    rows = jnp.asarray(rows, dtype=jnp.uint8)
    if rows.shape[0] == 0:
        return display, False

    bits = ((rows[:, None] >> (7 - _COLUMNS)[None, :]) & 1).astype(jnp.uint8)
    target_x = (int(x) + _COLUMNS)[None, :] % width
    target_y = (int(y) + jnp.arange(rows.shape[0]))[:, None] % height

    hits = jnp.zeros((width, height), dtype=jnp.int32)
    hits = hits.at[target_x, target_y].add(bits)
    sprite = (hits % 2).astype(jnp.bool_)

    # A lit pixel goes dark on its first hit, an unlit one on its second
    collided = bool(jnp.any((display & (hits > 0)) | (hits > 1)))
    return display ^ sprite, collided


def pixel_at(display: jnp.ndarray, x: int, y: int) -> bool:
    width, height = display.shape
    return bool(display[int(x) % width, int(y) % height])


def snapshot(display: jnp.ndarray) -> np.ndarray:
    """Host-side copy of the display."""
    return np.array(display, dtype=bool, copy=True)
