"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Opcode(enum.Enum):
    """Instruction forms of the CHIP-8 instruction set."""
    NOP = enum.auto()                # 0000
    CLEAR_SCREEN = enum.auto()       # 00E0
    RETURN = enum.auto()             # 00EE
    JUMP = enum.auto()               # 1NNN
    CALL = enum.auto()               # 2NNN
    SKIP_EQ_IMM = enum.auto()        # 3XNN
    SKIP_NE_IMM = enum.auto()        # 4XNN
    SKIP_EQ_REG = enum.auto()        # 5XY0
    SET_IMM = enum.auto()            # 6XNN
    ADD_IMM = enum.auto()            # 7XNN
    MOVE = enum.auto()               # 8XY0
    OR = enum.auto()                 # 8XY1
    AND = enum.auto()                # 8XY2
    XOR = enum.auto()                # 8XY3
    ADD = enum.auto()                # 8XY4
    SUB = enum.auto()                # 8XY5
    SHIFT_RIGHT = enum.auto()        # 8XY6
    SUBN = enum.auto()               # 8XY7
    SHIFT_LEFT = enum.auto()         # 8XYE
    SKIP_NE_REG = enum.auto()        # 9XY0
    SET_INDEX = enum.auto()          # ANNN
    JUMP_OFFSET = enum.auto()        # BNNN
    RANDOM = enum.auto()             # CXNN
    DRAW = enum.auto()               # DXYN
    SKIP_KEY_PRESSED = enum.auto()   # EX9E
    SKIP_KEY_RELEASED = enum.auto()  # EXA1
    GET_DELAY = enum.auto()          # FX07
    WAIT_KEY = enum.auto()           # FX0A
    SET_DELAY = enum.auto()          # FX15
    SET_SOUND = enum.auto()          # FX18
    ADD_INDEX = enum.auto()          # FX1E
    FONT_CHAR = enum.auto()          # FX29
    BCD = enum.auto()                # FX33
    STORE_REGS = enum.auto()         # FX55
    LOAD_REGS = enum.auto()          # FX65
    UNKNOWN = enum.auto()


# Exact 16-bit matches, checked before any wildcard form
_EXACT = {
    0x0000: Opcode.NOP,
    0x00E0: Opcode.CLEAR_SCREEN,
    0x00EE: Opcode.RETURN,
}

# First nibble alone selects the form
_BY_OPCODE = {
    0x1: Opcode.JUMP,
    0x2: Opcode.CALL,
    0x3: Opcode.SKIP_EQ_IMM,
    0x4: Opcode.SKIP_NE_IMM,
    0x6: Opcode.SET_IMM,
    0x7: Opcode.ADD_IMM,
    0xA: Opcode.SET_INDEX,
    0xB: Opcode.JUMP_OFFSET,
    0xC: Opcode.RANDOM,
    0xD: Opcode.DRAW,
}

# First and last nibble select the form
_BY_OPCODE_AND_N = {
    (0x5, 0x0): Opcode.SKIP_EQ_REG,
    (0x8, 0x0): Opcode.MOVE,
    (0x8, 0x1): Opcode.OR,
    (0x8, 0x2): Opcode.AND,
    (0x8, 0x3): Opcode.XOR,
    (0x8, 0x4): Opcode.ADD,
    (0x8, 0x5): Opcode.SUB,
    (0x8, 0x6): Opcode.SHIFT_RIGHT,
    (0x8, 0x7): Opcode.SUBN,
    (0x8, 0xE): Opcode.SHIFT_LEFT,
    (0x9, 0x0): Opcode.SKIP_NE_REG,
}

# First nibble and low byte select the form
_BY_OPCODE_AND_NN = {
    (0xE, 0x9E): Opcode.SKIP_KEY_PRESSED,
    (0xE, 0xA1): Opcode.SKIP_KEY_RELEASED,
    (0xF, 0x07): Opcode.GET_DELAY,
    (0xF, 0x0A): Opcode.WAIT_KEY,
    (0xF, 0x15): Opcode.SET_DELAY,
    (0xF, 0x18): Opcode.SET_SOUND,
    (0xF, 0x1E): Opcode.ADD_INDEX,
    (0xF, 0x29): Opcode.FONT_CHAR,
    (0xF, 0x33): Opcode.BCD,
    (0xF, 0x55): Opcode.STORE_REGS,
    (0xF, 0x65): Opcode.LOAD_REGS,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Opcode
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def classify(instruction: int) -> Opcode:
    """Select the instruction form for a 16-bit word."""
    if instruction in _EXACT:
        return _EXACT[instruction]

    opcode = (instruction & 0xF000) >> 12
    if opcode in _BY_OPCODE:
        return _BY_OPCODE[opcode]
    if opcode in (0x5, 0x8, 0x9):
        return _BY_OPCODE_AND_N.get((opcode, instruction & 0x000F), Opcode.UNKNOWN)
    return _BY_OPCODE_AND_NN.get((opcode, instruction & 0x00FF), Opcode.UNKNOWN)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction)
    return DecodedInstruction(
        raw=instruction,
        op=classify(instruction),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
