"""
PDP-11 Simulator — Word-Addressed Memory

32K 16-bit words covering the full 64 KiB byte address space. Addresses
handed around by the CPU are byte addresses; the word holding byte
address A is word A >> 1, so an odd address selects the word containing
it. Because every register is masked to 16 bits, every effective address
the CPU can form lands inside the array. Indexes outside it only come
from direct API misuse and raise MemoryFault.

Memory does not count accesses. The operand resolver and the engine
charge reads and writes to ExecutionStats themselves, because which
accesses count as data reads is decided by addressing mode, not by the
memory access itself.
"""

import logging
from array import array
from typing import Iterable, List

from ..errors import MemoryFault, ProgramTooLarge
from ..cpu.regs import WORD_MASK

log = logging.getLogger(__name__)

MEM_WORDS = 32 * 1024


class Memory:
    """Flat array of unsigned 16-bit words."""

    def __init__(self, size: int = MEM_WORDS):
        self.size = size
        self._mem = array('H', [0]) * size

    # --- Word index access ---

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < self.size:
            raise MemoryFault('memory', index)
        return self._mem[index]

    def __setitem__(self, index: int, value: int):
        if not 0 <= index < self.size:
            raise MemoryFault('memory', index)
        self._mem[index] = value & WORD_MASK

    # --- Byte address access ---

    def read_word(self, addr: int) -> int:
        """Read the word at byte address ``addr``."""
        return self[addr >> 1]

    def write_word(self, addr: int, value: int):
        """Write ``value`` to the word at byte address ``addr``."""
        self[addr >> 1] = value

    # --- Bulk load ---

    def load_words(self, words: Iterable[int], base: int = 0) -> int:
        """Load words sequentially from word index ``base``.

        Returns the number of words loaded. Raises ProgramTooLarge before
        touching memory if the program does not fit.
        """
        words = list(words)
        if base + len(words) > self.size:
            raise ProgramTooLarge(base + len(words), self.size)
        for i, word in enumerate(words):
            self._mem[base + i] = word & WORD_MASK
        log.debug("Loaded %d words at word index %d", len(words), base)
        return len(words)

    def clear(self):
        self._mem = array('H', [0]) * self.size

    # --- Dump ---

    def dump(self, count: int = 20) -> List[str]:
        """First ``count`` words as ``  0aaaa: oooooo`` lines."""
        return [f"  0{i * 2:04o}: {self._mem[i]:06o}"
                for i in range(min(count, self.size))]
