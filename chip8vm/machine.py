"""Host-facing CHIP-8 machine handle."""

from typing import Optional

import jax
import numpy as np

from chip8vm.constants import MAX_PROGRAM_SIZE
from chip8vm.decode import decode
from chip8vm.errors import Chip8Error
from chip8vm.logging import MachineLogger
from chip8vm.state import EmulatorState, create_state
from chip8vm import emulator


class Machine:
    """A CHIP-8 machine driven one step at a time by its host.

    The machine holds a single immutable EmulatorState value. Every
    operation computes the next value and only then commits it, so an
    operation that raises leaves the machine exactly as it was.

    Args:
        seed: Seed for the random source used by CXNN
        logger: Logger for lifecycle events and faults
        trace: Log every executed instruction at DEBUG level
    """

    def __init__(self, seed: int = 0, logger: Optional[MachineLogger] = None, trace: bool = False):
        self.seed = seed
        self.logger = logger or MachineLogger()
        self.trace = trace
        self.state = create_state(jax.random.PRNGKey(seed))

    def reset(self):
        """Return to the freshly constructed state, discarding any program."""
        self.state = create_state(jax.random.PRNGKey(self.seed))
        self.logger.log_reset()

    def load_program(self, data):
        """Install a program image at 0x200."""
        self.state = emulator.load_program(self.state, data)
        self.logger.log_load(len(data), MAX_PROGRAM_SIZE)

    def step(self) -> None:
        """Execute exactly one fetch-decode-execute cycle."""
        pc = self.pc
        try:
            fetched, word = emulator.fetch(self.state)
            if self.trace:
                self.logger.log_instruction(pc, word, decode(word).op.name)
            new_state = emulator.execute(fetched, word)
        except Chip8Error as e:
            self.logger.debug(f"Fault at PC=0x{pc:03X}: {e}")
            raise
        self.state = new_state

    def skip_instruction(self):
        """Move past the current instruction without executing it."""
        self.state = self.state.replace(pc=self.state.pc + 2)

    def tick_timers(self):
        """Advance both countdown timers by one tick."""
        self.state = emulator.tick_timers(self.state)

    def set_key(self, index: int, pressed: bool):
        """Update the pressed state of keypad key 0x0-0xF."""
        self.state = emulator.set_key(self.state, index, pressed)

    def framebuffer(self) -> np.ndarray:
        """Current display as a read-only (32, 64) boolean array, [y, x]."""
        frame = np.array(self.state.display, dtype=np.bool_)
        frame.setflags(write=False)
        return frame

    def snapshot(self) -> EmulatorState:
        """Independent copy of the whole machine state."""
        return self.state

    def restore(self, snapshot: EmulatorState):
        """Replace the whole machine state with a snapshot."""
        if not isinstance(snapshot, EmulatorState):
            raise TypeError(f"Expected EmulatorState, got {type(snapshot).__name__}")
        self.state = snapshot
        self.logger.log_restore(self.pc)

    def register_dump(self) -> str:
        return emulator.register_dump(self.state)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> list[int]:
        return [int(v) for v in self.state.V]

    @property
    def stack_depth(self) -> int:
        return self.state.stack.pointer

    @property
    def sound_active(self) -> bool:
        return emulator.sound_active(self.state)
