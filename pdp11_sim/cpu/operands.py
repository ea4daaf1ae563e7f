"""
PDP-11 Simulator — Operand Resolver

Turns a (mode, register) pair into an effective address and a value,
applying auto-increment/decrement side effects and consuming the inline
displacement word for the index modes.

Addressing modes (3-bit mode field):
  0  R       Register                value = R
  1  (R)     Register deferred       addr = R
  2  (R)+    Autoincrement           addr = R, then R += 2
  3  @(R)+   Autoincrement deferred  addr = mem[R], then R += 2
  4  -(R)    Autodecrement           R -= 2, then addr = R
  5  @-(R)   Autodecrement deferred  R -= 2, then addr = mem[R]
  6  X(R)    Index                   addr = R + mem[PC], PC += 2
  7  @X(R)   Index deferred          addr = mem[R + mem[PC]], PC += 2

Statistics charged per mode:
  1, 3, 4, 5   one data word read
  2            one instruction word fetched when R is PC (#immediate: the
               operand is physically the next instruction word), else nothing
  6, 7         one instruction word fetched plus three data words read

The index displacement is added to R as it stood before PC moves past the
displacement word, so X(PC) is relative to the displacement's own address.
"""

from dataclasses import dataclass

from .regs import PC, WORD_MASK

REG = 0
REG_DEF = 1
AUTO_INC = 2
AUTO_INC_DEF = 3
AUTO_DEC = 4
AUTO_DEC_DEF = 5
INDEX = 6
INDEX_DEF = 7


@dataclass
class Operand:
    """One operand reference within one instruction.

    Built fresh for every reference and thrown away after the
    instruction; ``addr`` stays 0 for Register mode.
    """
    mode: int
    reg: int
    addr: int = 0
    value: int = 0


def resolve(regs, mem, stats, op: Operand) -> Operand:
    """Fill in ``op.addr`` and ``op.value``.

    Mutates registers for modes 2–7 and charges ``stats`` per the table
    in the module docstring. Returns ``op`` for convenience.
    """
    mode, r = op.mode, op.reg

    if mode == REG:
        op.addr = 0
        op.value = regs[r]

    elif mode == REG_DEF:
        stats.data_words_read += 1
        op.addr = regs[r]
        op.value = mem.read_word(op.addr)

    elif mode == AUTO_INC:
        if r == PC:
            stats.instruction_words_fetched += 1
        op.addr = regs[r]
        op.value = mem.read_word(op.addr)
        regs[r] = regs[r] + 2

    elif mode == AUTO_INC_DEF:
        stats.data_words_read += 1
        op.addr = mem.read_word(regs[r])
        op.value = mem.read_word(op.addr)
        regs[r] = regs[r] + 2

    elif mode == AUTO_DEC:
        stats.data_words_read += 1
        regs[r] = regs[r] - 2
        op.addr = regs[r]
        op.value = mem.read_word(op.addr)

    elif mode == AUTO_DEC_DEF:
        stats.data_words_read += 1
        regs[r] = regs[r] - 2
        op.addr = mem.read_word(regs[r])
        op.value = mem.read_word(op.addr)

    elif mode in (INDEX, INDEX_DEF):
        stats.instruction_words_fetched += 1
        stats.data_words_read += 3
        displacement = mem.read_word(regs.PC)
        addr = (regs[r] + displacement) & WORD_MASK
        regs.PC = regs.PC + 2
        if mode == INDEX_DEF:
            addr = mem.read_word(addr)
        op.addr = addr
        op.value = mem.read_word(addr)

    else:
        raise ValueError(f"Unknown addressing mode: {mode}")

    return op
