"""CHIP-8 ALU operations (8xxx)."""

from chip8vm.constants import BYTE_MASK, FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction, Opcode


def alu_set(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > BYTE_MASK)
    return result & BYTE_MASK, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    not_borrow = int(vx >= vy)
    return (vx - vy) & BYTE_MASK, not_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 1
    return vx >> 1, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    not_borrow = int(vy >= vx)
    return (vy - vx) & BYTE_MASK, not_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, int | None]:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    return (vx << 1) & BYTE_MASK, shifted_bit


ALU_OPERATIONS = {
    Opcode.MOVE: alu_set,
    Opcode.OR: alu_or,
    Opcode.AND: alu_and,
    Opcode.XOR: alu_xor,
    Opcode.ADD: alu_add,
    Opcode.SUB: alu_sub_xy,
    Opcode.SHIFT_RIGHT: alu_shift_right,
    Opcode.SUBN: alu_sub_yx,
    Opcode.SHIFT_LEFT: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher.

    The result lands in VX first and the flag in VF second, so with X == F
    the flag is what remains.
    """
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
