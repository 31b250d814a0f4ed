"""Main CHIP-8 execution engine."""

import operator

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import Opcode, decode
from chip8vm.constants import PROGRAM_START, MAX_PROGRAM_SIZE, NUM_KEYS, NUM_REGISTERS, BYTE_MASK
from chip8vm.errors import InvalidKey, ProgramTooLarge
from chip8vm.ram import read_bytes
from chip8vm.instructions.system import (
    no_op, execute_clear_screen, execute_return, execute_unknown
)
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_released
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Opcode.NOP: no_op,
    Opcode.CLEAR_SCREEN: execute_clear_screen,
    Opcode.RETURN: execute_return,
    Opcode.JUMP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SKIP_EQ_IMM: execute_skip_if_equal_immediate,
    Opcode.SKIP_NE_IMM: execute_skip_if_not_equal_immediate,
    Opcode.SKIP_EQ_REG: execute_skip_if_equal_register,
    Opcode.SET_IMM: execute_set,
    Opcode.ADD_IMM: execute_add,
    Opcode.MOVE: execute_alu_operation,
    Opcode.OR: execute_alu_operation,
    Opcode.AND: execute_alu_operation,
    Opcode.XOR: execute_alu_operation,
    Opcode.ADD: execute_alu_operation,
    Opcode.SUB: execute_alu_operation,
    Opcode.SHIFT_RIGHT: execute_alu_operation,
    Opcode.SUBN: execute_alu_operation,
    Opcode.SHIFT_LEFT: execute_alu_operation,
    Opcode.SKIP_NE_REG: execute_skip_if_not_equal_register,
    Opcode.SET_INDEX: execute_set_index,
    Opcode.JUMP_OFFSET: execute_jump_with_offset,
    Opcode.RANDOM: execute_random,
    Opcode.DRAW: execute_display,
    Opcode.SKIP_KEY_PRESSED: execute_skip_if_key_pressed,
    Opcode.SKIP_KEY_RELEASED: execute_skip_if_key_released,
    Opcode.GET_DELAY: execute_get_delay_timer,
    Opcode.WAIT_KEY: execute_wait_for_key,
    Opcode.SET_DELAY: execute_set_delay_timer,
    Opcode.SET_SOUND: execute_set_sound_timer,
    Opcode.ADD_INDEX: execute_add_to_index,
    Opcode.FONT_CHAR: execute_font_character,
    Opcode.BCD: execute_bcd_conversion,
    Opcode.STORE_REGS: execute_store_registers,
    Opcode.LOAD_REGS: execute_load_registers,
    Opcode.UNKNOWN: execute_unknown,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return HANDLERS[decoded_instruction.op](state, decoded_instruction)


def _pack_u16(high: int, low: int) -> int:
    """Pack two bytes into a big-endian word."""
    return (high << 8) | low


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    high, low = (int(b) for b in read_bytes(state.memory, pc, 2))
    return state.replace(pc=state.pc + 2), _pack_u16(high, low)


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch-decode-execute cycle."""
    state, instruction = fetch(state)
    return execute(state, instruction)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero."""
    delay = int(state.delay_timer)
    sound = int(state.sound_timer)
    return state.replace(
        delay_timer=jnp.astype(max(delay - 1, 0), jnp.uint8),
        sound_timer=jnp.astype(max(sound - 1, 0), jnp.uint8),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the host should be sounding the buzzer."""
    return int(state.sound_timer) > 0


def _program_byte(value) -> int:
    """Validate one program byte, rejecting non-integers and bools."""
    if isinstance(value, bool):
        raise ValueError(f"Program bytes must be integers, got {value!r}")
    try:
        byte = operator.index(value)
    except TypeError:
        raise ValueError(
            f"Program bytes must be integers, got {type(value).__name__}"
        ) from None
    if not 0 <= byte <= BYTE_MASK:
        raise ValueError(f"Program bytes must be in range 0-255, got {byte}")
    return byte


def load_program(state: EmulatorState, data) -> EmulatorState:
    """Copy a program image into memory starting at 0x200."""
    if isinstance(data, str):
        raise ValueError("Program must be bytes or a sequence of ints, not str")
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(data), MAX_PROGRAM_SIZE)
    program = [_program_byte(b) for b in data]
    if not program:
        return state
    rom_array = jnp.asarray(program, dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Set the pressed state of keypad key 0x0-0xF."""
    if isinstance(index, bool):
        raise InvalidKey(index)
    try:
        key = operator.index(index)
    except TypeError:
        raise InvalidKey(index) from None
    if not 0 <= key < NUM_KEYS:
        raise InvalidKey(index)
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def register_dump(state: EmulatorState) -> str:
    """Format V0-VF as four rows of four registers."""
    values = [int(v) for v in state.V]
    lines = []
    for row in range(0, NUM_REGISTERS, 4):
        cells = " ".join(f"V{i:02d}: {values[i]:02X}" for i in range(row, row + 4))
        lines.append(f"[ {cells} ]")
    return "\n".join(lines)
