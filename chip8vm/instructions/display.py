"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from chip8vm.ram import read_bytes

SPRITE_WIDTH = 8

# Bit position inside a sprite row, most significant bit first
_columns = jnp.arange(SPRITE_WIDTH)
_bit_shifts = (SPRITE_WIDTH - 1) - _columns


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Sprite rows are read from memory at I. Pixels past the right or bottom
    edge wrap around to the opposite side. VF is set when any lit pixel is
    turned off.
    """
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    rows = instruction.n

    sprite_bytes = read_bytes(state.memory, int(state.I), rows)
    sprite = ((sprite_bytes[:, None] >> _bit_shifts[None, :]) & 1).astype(jnp.bool_)

    ys = (sprite_y + jnp.arange(rows)) % SCREEN_HEIGHT
    xs = (sprite_x + _columns) % SCREEN_WIDTH
    layer = jnp.zeros_like(state.display).at[ys[:, None], xs[None, :]].set(sprite)

    collision = bool(jnp.any(state.display & layer))
    return state.replace(
        display=state.display ^ layer,
        V=state.V.at[FLAG_REGISTER].set(int(collision))
    )
