"""Console logging utilities for the chix8 front end.

The emulator core never logs; only the driver and the entry point report
through this logger.
"""

import time
import sys
from typing import Any, Dict

from chix8.state import EmulatorState


# Level name -> (rank, ANSI colour)
LEVELS = {
    "DEBUG": (0, "\033[36m"),
    "INFO": (1, "\033[32m"),
    "ERROR": (2, "\033[31m"),
}
RESET = "\033[0m"


class ConsoleLogger:
    """Levelled console logger for the emulator front end.

    Lines look like ``[   0.12s][    INFO][chix8] Loaded: pong.ch8``. Colours
    are only used when ``stream`` is a terminal.
    """

    def __init__(
        self,
        name: str = "chix8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        if log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level {log_level!r}, expected one of {sorted(LEVELS)}")
        self.name = name
        self.threshold = LEVELS[log_level.upper()][0]
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = use_colors and getattr(self.stream, "isatty", lambda: False)()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _format_message(self, level: str, message: str) -> str:
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{LEVELS[level][1]}{tag}{RESET}"
        return f"{prefix}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Write ``message`` if ``level`` reaches the logger's threshold."""
        if LEVELS[level][0] >= self.threshold:
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def log_config(self, config: Dict[str, Any]):
        """Log the front end configuration, one key per line."""
        self.info("Starting with configuration:")
        for key, value in config.items():
            if key.endswith("_color") and isinstance(value, int):
                self.info(f"  {key}: 0x{value:08X}")
            else:
                self.info(f"  {key}: {value}")

    def log_machine(self, state: EmulatorState):
        """Log a one-line register dump at DEBUG level."""
        registers = " ".join(f"V{i:X}={int(v):02X}" for i, v in enumerate(state.V))
        self.debug(
            f"PC=0x{int(state.pc):03X} I=0x{int(state.I):03X} "
            f"DT={int(state.delay_timer)} ST={int(state.sound_timer)} {registers}"
        )
