"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import (
    execute, fetch, step, tick_timers, sound_active, load_program, set_key, register_dump
)
from chip8vm.decode import DecodedInstruction, Opcode, decode
from chip8vm.constants import *
from chip8vm.errors import (
    Chip8Error, UnknownInstruction, MemoryAccessError, StackOverflow,
    StackUnderflow, ProgramTooLarge, InvalidKey
)
from chip8vm.machine import Machine
from chip8vm.host import HostConfig, FaultPolicy, StopRun, run_frame, run_frames

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "sound_active",
    "load_program",
    "set_key",
    "register_dump",
    "DecodedInstruction",
    "Opcode",
    "decode",
    "Chip8Error",
    "UnknownInstruction",
    "MemoryAccessError",
    "StackOverflow",
    "StackUnderflow",
    "ProgramTooLarge",
    "InvalidKey",
    "Machine",
    "HostConfig",
    "FaultPolicy",
    "StopRun",
    "run_frame",
    "run_frames",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
