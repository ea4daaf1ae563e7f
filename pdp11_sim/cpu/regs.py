"""
PDP-11 Simulator — Register File + Condition Code Management

Register model:
  R0–R5 — general purpose, 16-bit
  R6    — SP (stack pointer by convention; the core treats it like R0)
  R7    — PC (program counter)
  CC    — condition codes, low 4 bits of the PSW:
          bit 3: N (Negative — bit 15 of result)
          bit 2: Z (Zero — result is zero)
          bit 1: V (Overflow — signed overflow)
          bit 0: C (Carry — carry out of / borrow into bit 15)

Every write is masked to 16 bits. Instructions only touch the flags
they define; the set_* helpers preserve the rest.
"""

from ..errors import MemoryFault

WORD_MASK = 0o177777
SIGN_BIT = 0o100000
NUM_REGS = 8

PC = 7

# Condition code bit masks
CC_N = 0o10
CC_Z = 0o04
CC_V = 0o02
CC_C = 0o01


class Registers:
    """R0–R7 plus the N, Z, V, C condition codes."""

    __slots__ = ('_r', 'CC')

    def __init__(self):
        self._r = [0] * NUM_REGS
        self.CC: int = 0

    # --- Indexed access ---

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < NUM_REGS:
            raise MemoryFault('register', index)
        return self._r[index]

    def __setitem__(self, index: int, value: int):
        if not 0 <= index < NUM_REGS:
            raise MemoryFault('register', index)
        self._r[index] = value & WORD_MASK

    @property
    def PC(self) -> int:
        return self._r[PC]

    @PC.setter
    def PC(self, value: int):
        self._r[PC] = value & WORD_MASK

    # --- Condition code access ---

    def set_NZVC(self, flags: int):
        """Set N, Z, V, C flags."""
        self.CC = flags & 0o17

    def set_NZV(self, flags: int):
        """Set N, Z, V flags. Preserves C."""
        self.CC = (self.CC & CC_C) | (flags & 0o16)

    @property
    def negative(self) -> bool:
        return bool(self.CC & CC_N)

    @property
    def zero(self) -> bool:
        return bool(self.CC & CC_Z)

    @property
    def overflow(self) -> bool:
        return bool(self.CC & CC_V)

    @property
    def carry(self) -> bool:
        return bool(self.CC & CC_C)

    def nzvc_bits(self) -> str:
        """Flags as a 4-character 0/1 string in N, Z, V, C order."""
        return ''.join('1' if self.CC & mask else '0'
                       for mask in (CC_N, CC_Z, CC_V, CC_C))

    # --- Display ---

    def display(self) -> str:
        """Two-line register dump, even registers on the first line."""
        r = self._r
        return (f"  R0:0{r[0]:06o}  R2:0{r[2]:06o}  R4:0{r[4]:06o}  R6:0{r[6]:06o}\n"
                f"  R1:0{r[1]:06o}  R3:0{r[3]:06o}  R5:0{r[5]:06o}  R7:0{r[7]:06o}")

    def reset(self):
        """Clear all registers and flags. PC starts at 0."""
        self._r = [0] * NUM_REGS
        self.CC = 0
