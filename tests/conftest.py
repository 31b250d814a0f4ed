"""Test configuration and fixtures for CHIP-8 machine tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Machine
from chip8vm.logging import MachineLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def machine():
    """Provide a quiet Machine."""
    return Machine(seed=0, logger=MachineLogger(use_colors=False))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def with_registers(state, **registers):
    """Helper to set registers by name, e.g. with_registers(state, V1=0x10)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program(*words):
    """Assemble big-endian instruction words into program bytes."""
    data = bytearray()
    for word in words:
        data += word.to_bytes(2, "big")
    return bytes(data)
