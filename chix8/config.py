"""Emulator configuration surface."""

import dataclasses
from typing import Any, Dict, Optional, Union

from omegaconf import DictConfig, OmegaConf

from chix8.constants import DEFAULT_INSTRUCTION_FREQUENCY
from chix8.runner import cycles_for_frame


def parse_color(value: Union[int, str]) -> int:
    """Accept a colour as an int or a string such as ``"0xFF00FFFF"``."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid colour {value!r}")
    if isinstance(value, str):
        try:
            value = int(value, 0)
        except ValueError:
            raise ValueError(f"Invalid colour {value!r}") from None
    if not isinstance(value, int) or not 0 <= value <= 0xFFFFFFFF:
        raise ValueError(f"Colour {value!r} is not a 32-bit RGBA value")
    return value


@dataclasses.dataclass(frozen=True)
class EmulatorConfig:
    """Front end settings.

    Attributes:
        rom: Path of the ROM to run
        fg_color: RGBA8888 colour of lit pixels
        bg_color: RGBA8888 colour of unlit pixels
        scale: Window pixels per CHIP-8 pixel
        instruction_frequency: CPU instructions per second
    """
    rom: Optional[str] = None
    fg_color: int = 0xFFFFFFFF
    bg_color: int = 0x000000FF
    scale: int = 20
    instruction_frequency: int = DEFAULT_INSTRUCTION_FREQUENCY

    def __post_init__(self):
        object.__setattr__(self, "fg_color", parse_color(self.fg_color))
        object.__setattr__(self, "bg_color", parse_color(self.bg_color))
        if not isinstance(self.scale, int) or self.scale < 1:
            raise ValueError(f"scale must be a positive integer, got {self.scale!r}")
        if not isinstance(self.instruction_frequency, int) or self.instruction_frequency < 1:
            raise ValueError(
                f"instruction_frequency must be a positive integer, got {self.instruction_frequency!r}"
            )

    def cycles_for_frame(self, frame: int) -> int:
        """Instructions to run in the given 60 Hz frame."""
        return cycles_for_frame(self.instruction_frequency, frame)

    @classmethod
    def from_dict(cls, values: Union[Dict[str, Any], DictConfig]) -> "EmulatorConfig":
        """Build a config from a plain mapping or an OmegaConf node."""
        if isinstance(values, DictConfig):
            values = OmegaConf.to_container(values, resolve=True)
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**values)
