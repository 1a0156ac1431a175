"""CHIP-8 machine errors."""


class Chip8Error(Exception):
    """Base class for every error raised by the machine."""


class RomTooLarge(Chip8Error):
    def __init__(self, size: int, max_size: int):
        super().__init__(f"ROM is {size} bytes, maximum is {max_size}")
        self.size = size
        self.max_size = max_size


class RomLoadFailed(Chip8Error):
    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Could not read ROM {path!r}: {cause}")
        self.path = path


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode: int):
        super().__init__(f"Unknown opcode 0x{opcode:04X}")
        self.opcode = opcode


class MemoryOutOfBounds(Chip8Error):
    def __init__(self, address: int):
        super().__init__(f"Fetch outside memory at 0x{address:04X}")
        self.address = address


class StackOverflow(Chip8Error):
    """Subroutine call with every stack slot in use."""


class StackUnderflow(Chip8Error):
    """Return with an empty stack."""


class InvalidKeyIndex(Chip8Error):
    def __init__(self, index: int):
        super().__init__(f"Key index {index} outside 0x0-0xF")
        self.index = index


class InvalidTransition(Chip8Error):
    """Status event that has no meaning in the current phase."""
