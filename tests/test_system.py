"""Tests for system instructions (0xxx) and the return stack."""

import jax.numpy as jnp
import pytest
from chip8vm import execute, StackOverflow, StackUnderflow, UnknownInstruction, STACK_SIZE


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True).at[31, 63].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0


def test_nop(fresh_state):
    """0000 is accepted and does nothing."""
    state = execute(fresh_state, 0x0000)
    assert state is fresh_state


@pytest.mark.parametrize("instruction", [0x0123, 0x00E1, 0x00FF, 0x0FFF])
def test_machine_routine_is_unknown(fresh_state, instruction):
    """0NNN machine-code routines are not part of the instruction set."""
    with pytest.raises(UnknownInstruction) as excinfo:
        execute(fresh_state, instruction)
    assert excinfo.value.word == instruction
    assert f"0x{instruction:04X}" in str(excinfo.value)


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.pointer == 1
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_unwind_in_order(fresh_state):
    state = fresh_state.replace(pc=fresh_state.pc + 2)
    state = execute(state, 0x2300)
    state = state.replace(pc=state.pc + 2)
    state = execute(state, 0x2400)

    state = execute(state, 0x00EE)
    assert state.pc == 0x302
    state = execute(state, 0x00EE)
    assert state.pc == 0x202


def test_stack_overflow(fresh_state):
    """A seventeenth nested call is a fault."""
    state = fresh_state
    for _ in range(STACK_SIZE):
        state = execute(state, 0x2300)
    assert state.stack.pointer == STACK_SIZE

    with pytest.raises(StackOverflow):
        execute(state, 0x2300)


def test_stack_underflow(fresh_state):
    """Return with an empty stack is a fault."""
    with pytest.raises(StackUnderflow):
        execute(fresh_state, 0x00EE)
