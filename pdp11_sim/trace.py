"""
PDP-11 Simulator — Instruction Trace

TraceLog is the only place simulator text goes. Lines are written
straight to a stream when one is given (the CLI streams to stdout so
long runs do not pile up in memory) and kept in a list otherwise, which
is what tests read back through get_trace().

Line formats:
  at 0oooo, mov instruction sm 2, sr 7 dm 0 dr 0
  at 0oooo, br instruction with offset oooo
    src.value = 0oooooo
    nzvc bits = 4'b0100
"""

from typing import List, Optional, TextIO

from .cpu.decoder import Family, Instruction, Opcode


class TraceLog:
    """Collects or streams trace lines."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.lines: List[str] = []

    def emit(self, line: str):
        if self.stream is not None:
            self.stream.write(line + '\n')
        else:
            self.lines.append(line)

    def text(self) -> str:
        return '\n'.join(self.lines)

    def clear(self):
        self.lines.clear()


def format_pc(pc: int) -> str:
    return f"at 0{pc:04o}, "


def describe(ins: Instruction, branch_offset: int = 0) -> str:
    """Trace line for one instruction, without the ``at`` prefix.

    ``branch_offset`` is the offset as the instruction used it (after
    any sign extension). BNE reports its raw field instead.
    """
    family = ins.family
    if family is Family.HALT:
        return "halt instruction"
    if family is Family.DOUBLE_OPERAND:
        return (f"{ins.mnemonic} instruction sm {ins.src_mode}, sr {ins.src_reg} "
                f"dm {ins.dst_mode} dr {ins.dst_reg}")
    if family is Family.SHIFT:
        return f"{ins.mnemonic} instruction dm {ins.dst_mode} dr {ins.dst_reg}"
    if ins.opcode is Opcode.SOB:
        return f"sob instruction reg {ins.src_reg} with offset {branch_offset:03o}"
    if ins.opcode is Opcode.BNE:
        return f"bne instruction with offset {ins.offset:04o}"
    return f"{ins.mnemonic} instruction with offset {branch_offset:04o}"


def format_value(label: str, value: int) -> str:
    """``  src.value = 0oooooo`` style detail line."""
    return f"  {label:<9} = 0{value:06o}"


def format_bits(bits: str) -> str:
    return f"  nzvc bits = 4'b{bits}"


def format_write(value: int, addr: int) -> str:
    return f"  value 0{value:06o} is written to 0{addr:06o}"
