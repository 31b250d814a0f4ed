"""CHIP-8 machine faults.

Every fault is raised before a new state is produced, so the state the
caller holds is never partially updated.
"""


class Chip8Error(Exception):
    """Base class for all machine faults."""


class UnknownInstruction(Chip8Error):
    """Instruction word outside the CHIP-8 instruction table."""

    def __init__(self, word: int):
        self.word = word
        super().__init__(f"Unknown instruction 0x{word:04X}")


class MemoryAccessError(Chip8Error, IndexError):
    """Read or write touching an address past the end of memory."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Memory access out of bounds: 0x{address:04X} (+{length} bytes)"
        )


class StackOverflow(Chip8Error):
    """Subroutine call with a full return stack."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow calling 0x{address:03X}")


class StackUnderflow(Chip8Error):
    """Return with an empty return stack."""

    def __init__(self):
        super().__init__("Stack underflow on return")


class ProgramTooLarge(Chip8Error, ValueError):
    """Program image does not fit above the program start address."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program of {size} bytes exceeds capacity of {capacity} bytes")


class InvalidKey(Chip8Error, IndexError):
    """Keypad index outside 0x0-0xF."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"Invalid key index {index!r}")
