"""
PDP-11 Simulator — Main Simulator Class

Integrates:
  - Register file + condition codes (cpu/regs.py)
  - 32K-word memory (mem/memory.py)
  - Instruction decoder (cpu/decoder.py)
  - Operand resolver (cpu/operands.py)
  - ALU flag arithmetic (cpu/alu.py)
  - Statistics and trace (stats.py, trace.py)

Execution model, one step:
  1. Fetch the word at PC; count one instruction executed and one
     instruction word fetched; PC += 2
  2. Zero word → HALTED (the halt word is counted in step 1)
  3. Decode → IllegalInstruction puts the simulator in FAULTED, with
     fault_pc set to the address of the bad word
  4. Resolve operands, execute, update flags and counters, maybe branch

Stop reasons:
  - HALT:     all-zero instruction word
  - ILLEGAL:  word matched no supported instruction
  - TIMEOUT:  SimConfig.max_steps reached (off by default)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, TextIO

from .cpu.regs import Registers
from .cpu.decoder import Instruction, Opcode, decode
from .cpu.operands import Operand, AUTO_INC, REG, resolve
from .cpu import alu
from .errors import IllegalInstruction
from .loader import parse_octal_words, format_echo
from .mem.memory import Memory
from .stats import ExecutionStats
from .trace import (TraceLog, describe, format_bits, format_pc,
                    format_value, format_write)

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    ILLEGAL = 'ILLEGAL'
    TIMEOUT = 'TIMEOUT'


class SimState(Enum):
    RUNNING = 'RUNNING'
    HALTED = 'HALTED'
    FAULTED = 'FAULTED'


@dataclass
class SimConfig:
    """Run options.

    verbose implies trace. max_steps=None runs until HALT or ILLEGAL.
    """
    trace: bool = False
    verbose: bool = False
    max_steps: Optional[int] = None

    def __post_init__(self):
        if self.verbose:
            self.trace = True


class PDP11Simulator:
    """PDP-11 subset simulator.

    Usage:
        sim = PDP11Simulator()
        sim.load_octal("012700 000005 062700 000003 000000")
        sim.run()               # StopReason.HALT
        sim.regs[0]             # 0o10
        print(sim.stats.report())
    """

    def __init__(self, config: Optional[SimConfig] = None,
                 trace_stream: Optional[TextIO] = None):
        self.config = config or SimConfig()
        self.regs = Registers()
        self.mem = Memory()
        self.stats = ExecutionStats()
        self.state = SimState.RUNNING
        self.fault_pc: Optional[int] = None

        self._trace = TraceLog(trace_stream)
        self._at = ''

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_words(self, words: Iterable[int]) -> int:
        """Load a program at word 0. Returns the number of words loaded."""
        words = list(words)
        if self.config.verbose:
            for line in format_echo(words):
                self._trace.emit(line)
        return self.mem.load_words(words)

    def load_octal(self, text: str) -> int:
        """Parse octal program text and load it at word 0."""
        return self.load_words(parse_octal_words(text))

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None.

        Once halted or faulted, further calls do nothing and keep
        returning the same reason.
        """
        if self.state is SimState.HALTED:
            return StopReason.HALT
        if self.state is SimState.FAULTED:
            return StopReason.ILLEGAL

        pc = self.regs.PC
        self._at = format_pc(pc)

        word = self.mem.read_word(pc)
        self.stats.instructions_executed += 1
        self.stats.instruction_words_fetched += 1
        self.regs.PC = pc + 2

        try:
            ins = decode(word, pc)
        except IllegalInstruction as e:
            self.state = SimState.FAULTED
            self.fault_pc = e.pc
            if self.config.trace:
                self._trace.emit(self._at)
            log.warning("%s", e)
            return StopReason.ILLEGAL

        if ins.opcode is Opcode.HALT:
            self._trace_instruction(ins)
            self._trace_regs()
            self.state = SimState.HALTED
            log.debug("Halted at PC %06o after %d instructions",
                      pc, self.stats.instructions_executed)
            return StopReason.HALT

        self._dispatch[ins.opcode](ins)
        self._trace_regs()
        return None

    def run(self) -> StopReason:
        """Run until HALT, ILLEGAL, or the configured step limit."""
        max_steps = self.config.max_steps
        steps = 0
        while True:
            if max_steps is not None and steps >= max_steps:
                log.warning("Stopped after %d steps without halting", steps)
                return StopReason.TIMEOUT
            reason = self.step()
            steps += 1
            if reason is not None:
                return reason

    # ══════════════════════════════════════════════
    # Helpers
    # ══════════════════════════════════════════════

    def _resolve(self, mode: int, reg: int) -> Operand:
        return resolve(self.regs, self.mem, self.stats, Operand(mode, reg))

    def _branch(self, target: int):
        self.regs.PC = target
        self.stats.branches_taken += 1

    def _trace_instruction(self, ins: Instruction, offset: int = 0):
        if self.config.trace:
            self._trace.emit(self._at + describe(ins, offset))

    def _trace_value(self, label: str, value: int):
        if self.config.verbose:
            self._trace.emit(format_value(label, value))

    def _trace_bits(self):
        if self.config.verbose:
            self._trace.emit(format_bits(self.regs.nzvc_bits()))

    def _trace_regs(self):
        if self.config.verbose:
            for line in self.regs.display().split('\n'):
                self._trace.emit(line)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(ins)

    def _build_dispatch(self) -> dict:
        """Build opcode → handler table. HALT is handled in step()."""
        return {
            Opcode.MOV: self._op_mov,
            Opcode.CMP: self._op_cmp,
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,
            Opcode.ASL: self._op_asl,
            Opcode.ASR: self._op_asr,
            Opcode.BR:  self._op_br,
            Opcode.BEQ: self._op_beq,
            Opcode.BNE: self._op_bne,
            Opcode.SOB: self._op_sob,
        }

    # ── Double operand ──

    def _op_mov(self, ins: Instruction):
        """MOV: only an autoincrement destination is written to memory;
        every other destination mode writes the destination register."""
        src = self._resolve(ins.src_mode, ins.src_reg)
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('src.value', src.value)

        self.regs.set_NZV(alu.mov_flags(src.value))
        self._trace_bits()

        if dst.mode == AUTO_INC:
            self.mem.write_word(dst.addr, src.value)
            self.stats.data_words_written += 1
            if self.config.verbose:
                self._trace.emit(format_write(src.value, dst.addr))
        else:
            self.regs[dst.reg] = src.value

    def _op_cmp(self, ins: Instruction):
        src = self._resolve(ins.src_mode, ins.src_reg)
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('src.value', src.value)
        self._trace_value('dst.value', dst.value)

        result, flags = alu.cmp16(src.value, dst.value)
        self._trace_value('result', result)
        self.regs.set_NZVC(flags)
        self._trace_bits()

    def _op_add(self, ins: Instruction):
        src = self._resolve(ins.src_mode, ins.src_reg)
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('src.value', src.value)
        self._trace_value('dst.value', dst.value)

        result, flags = alu.add16(src.value, dst.value)
        self.regs.set_NZVC(flags)
        self._trace_value('result', result)
        self._trace_bits()
        self.regs[dst.reg] = result

    def _op_sub(self, ins: Instruction):
        src = self._resolve(ins.src_mode, ins.src_reg)
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('src.value', src.value)
        self._trace_value('dst.value', dst.value)

        result, flags = alu.sub16(src.value, dst.value)
        self.regs.set_NZVC(flags)
        self._trace_value('result', result)
        self._trace_bits()
        self.regs[dst.reg] = result

    # ── Shifts ──

    def _op_asl(self, ins: Instruction):
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('dst.value', dst.value)

        result, flags = alu.asl16(self.regs[dst.reg], dst.value)
        self._trace_value('result', result)
        self.regs.set_NZVC(flags)
        self._trace_bits()
        self.regs[dst.reg] = result

    def _op_asr(self, ins: Instruction):
        dst = self._resolve(ins.dst_mode, ins.dst_reg)
        self._trace_instruction(ins)
        self._trace_value('dst.value', dst.value)

        result, flags = alu.asr16(self.regs[dst.reg], dst.value)
        self.regs.set_NZVC(flags)
        self._trace_value('result', result)
        self._trace_bits()
        self.regs[dst.reg] = result

    # ── Branches ──

    def _op_br(self, ins: Instruction):
        self.stats.branches_executed += 1
        offset = alu.sign_extend8(ins.offset)
        self._branch(self.regs.PC + (offset << 1))
        self._trace_instruction(ins, offset)

    def _op_beq(self, ins: Instruction):
        """BEQ: the offset is used unsigned, unlike BR and BNE."""
        self.stats.branches_executed += 1
        offset = ins.offset
        if self.regs.zero:
            self._branch(self.regs.PC + (offset << 1))
        self._trace_instruction(ins, offset)

    def _op_bne(self, ins: Instruction):
        self.stats.branches_executed += 1
        self._trace_instruction(ins)
        offset = alu.sign_extend8(ins.offset)
        if not self.regs.zero:
            self._branch(self.regs.PC + (offset << 1))

    def _op_sob(self, ins: Instruction):
        """SOB: decrement the register, branch back while it is nonzero."""
        self.stats.branches_executed += 1
        counter = self._resolve(REG, ins.src_reg)
        offset = ins.offset
        self.regs[counter.reg] = counter.value - 1
        if self.regs[counter.reg] != 0:
            self._branch(self.regs.PC - (offset << 1))
        self._trace_instruction(ins, offset)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Enable instruction trace logging. Disabling also turns off verbose."""
        self.config.trace = enable
        if not enable:
            self.config.verbose = False

    def get_trace(self) -> str:
        return self._trace.text()

    def clear_trace(self):
        self._trace.clear()

    def memory_dump(self, count: int = 20) -> str:
        """Header plus the first ``count`` words, as printed after a verbose run."""
        lines = [f"first {count} words of memory after execution halts:"]
        lines.extend(self.mem.dump(count))
        return '\n'.join(lines)

    def reset(self):
        """Full simulator reset: registers, memory, counters, trace."""
        self.regs.reset()
        self.mem.clear()
        self.stats.reset()
        self.state = SimState.RUNNING
        self.fault_pc = None
        self._trace.clear()
