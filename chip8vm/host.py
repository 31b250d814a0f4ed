"""Headless frame loop for driving a Machine.

Each frame applies key changes, runs a fixed number of instructions, ticks
the timers once and returns the framebuffer. This is the loop a windowed
frontend runs at 60 frames per second.
"""

import enum
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np
from tqdm import tqdm

from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import Chip8Error
from chip8vm.machine import Machine


class FaultPolicy(enum.Enum):
    """What the frame loop does when an instruction faults."""
    HALT = "halt"  # re-raise to the caller
    SKIP = "skip"  # log, step past the instruction and continue; fetch faults stop
    STOP = "stop"  # log and end the run


@dataclass(frozen=True)
class HostConfig:
    """Frame loop settings.

    Attributes:
        steps_per_frame: Instructions executed per frame (10 at 60 fps is ~600 Hz)
        fault_policy: Handling of faults raised by Machine.step
    """
    steps_per_frame: int = 10
    fault_policy: FaultPolicy = FaultPolicy.HALT

    def __post_init__(self):
        if self.steps_per_frame < 0:
            raise ValueError(f"steps_per_frame must be non-negative, got {self.steps_per_frame}")


class StopRun(Exception):
    """Raised by run_frame when a fault ends the run under FaultPolicy.STOP."""

    def __init__(self, error: Chip8Error):
        self.error = error
        super().__init__(str(error))


def _can_fetch(machine: Machine) -> bool:
    """Whether a full instruction word lies at pc."""
    return machine.pc + 2 <= MEMORY_SIZE


def _run_step(machine: Machine, config: HostConfig):
    try:
        machine.step()
    except Chip8Error as e:
        if config.fault_policy is FaultPolicy.HALT:
            raise
        if config.fault_policy is FaultPolicy.SKIP and _can_fetch(machine):
            machine.logger.log_fault(machine.pc, e, level="WARNING")
            machine.skip_instruction()
            return
        # No instruction word at pc, so there is nothing to skip over
        machine.logger.log_fault(machine.pc, e, level="ERROR")
        raise StopRun(e) from e


def run_frame(
    machine: Machine,
    config: HostConfig = HostConfig(),
    keys: Optional[Mapping[int, bool]] = None,
) -> np.ndarray:
    """Run one frame and return the framebuffer."""
    for index, pressed in (keys or {}).items():
        machine.set_key(index, pressed)

    for _ in range(config.steps_per_frame):
        _run_step(machine, config)

    machine.tick_timers()
    return machine.framebuffer()


def run_frames(
    machine: Machine,
    frames: int,
    config: HostConfig = HostConfig(),
    progress: bool = False,
) -> int:
    """Run up to `frames` frames; return how many completed."""
    completed = 0
    with tqdm(total=frames, desc="Running", unit="frame", disable=not progress) as bar:
        for _ in range(frames):
            try:
                run_frame(machine, config)
            except StopRun:
                break
            completed += 1
            bar.update(1)
    return completed
