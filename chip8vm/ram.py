"""Bounds-checked access to CHIP-8 memory."""

import jax.numpy as jnp

from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import MemoryAccessError


def check_range(address: int, length: int = 1) -> None:
    """Raise MemoryAccessError unless address..address+length-1 is in memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)


def read_bytes(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read length bytes starting at address."""
    check_range(address, length)
    return memory[address:address + length]


def write_bytes(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    """Return memory with values written starting at address."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    check_range(address, values.shape[0])
    return memory.at[address:address + values.shape[0]].set(values)
