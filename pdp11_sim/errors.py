"""
PDP-11 Simulator — Exception Types

Every error the simulator raises derives from SimulatorError so the CLI
can catch them in one place. IllegalInstruction is raised by the decoder
and turned into a FAULTED stop by the engine; the other two only fire on
API misuse or oversize programs.
"""


class SimulatorError(Exception):
    """Base class for all simulator errors."""
    pass


class IllegalInstruction(SimulatorError):
    """Raised when a nonzero word matches no supported instruction family."""

    def __init__(self, word: int, pc: int):
        self.word = word
        self.pc = pc
        super().__init__(f"Bad instruction {word:06o} at PC {pc:06o}")


class MemoryFault(SimulatorError):
    """Raised on a register or memory index outside the modelled arrays."""

    def __init__(self, space: str, index: int):
        self.space = space
        self.index = index
        super().__init__(f"{space} index {index} out of range")


class ProgramTooLarge(SimulatorError):
    """Raised when a program has more words than memory can hold."""

    def __init__(self, count: int, capacity: int):
        self.count = count
        self.capacity = capacity
        super().__init__(
            f"Program has {count} words, memory holds {capacity}")
