"""Console logging utilities for chip8vm.

Provides a small level-filtered console logger plus a machine-specific
subclass with helpers for lifecycle events, instruction traces and faults.
"""

import time
import sys


LEVEL_ORDER = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3, "CRITICAL": 4}
LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Console logger with level filtering, colors and timestamps.

    A log_level of "CRITICAL" silences the logger, since nothing in the
    machine logs above ERROR.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "WARNING",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def is_enabled(self, level: str) -> bool:
        """Check if messages at level pass the current log level."""
        return LEVEL_ORDER.get(level.upper(), 1) >= LEVEL_ORDER.get(self.log_level, 2)

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS.get(level.upper(), '')}{level_str}{RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)


class MachineLogger(ConsoleLogger):
    """Logger for machine lifecycle events, traces and faults."""

    def __init__(self, name: str = "chip8vm", **kwargs):
        super().__init__(name, **kwargs)
        self.fault_count = 0

    def log_reset(self):
        self.info("Machine reset")

    def log_load(self, size: int, capacity: int):
        """Log a program load with its share of the program area."""
        self.info(f"Loaded program: {size} bytes ({size / capacity * 100:.1f}% of {capacity})")

    def log_instruction(self, pc: int, word: int, op_name: str):
        """Log one executed instruction."""
        if self.is_enabled("DEBUG"):
            self.debug(f"PC=0x{pc:03X} {word:04X} {op_name}")

    def log_fault(self, pc: int, error: Exception, level: str = "DEBUG"):
        """Log a machine fault at the instruction address it happened on."""
        self.fault_count += 1
        self.log(level, f"Fault at PC=0x{pc:03X}: {type(error).__name__}: {error}")

    def log_restore(self, pc: int):
        self.info(f"Restored snapshot at PC=0x{pc:03X}")
