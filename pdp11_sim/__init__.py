"""
PDP-11 Subset Simulator
=======================
An instruction-level simulator for a subset of the PDP-11: MOV, CMP, ADD,
SUB, ASL, ASR, BR, BEQ, BNE, SOB and HALT, over all eight word
addressing modes, with execution statistics.

Architecture:
    octal text ──> loader ──> memory ──> PDP11Simulator.step()
                                              │
                  decoder ─> operands ─> alu ─> stats / trace

    - cpu/regs.py:      R0–R7 + N Z V C
    - cpu/decoder.py:   three-width opcode probe → Instruction
    - cpu/operands.py:  eight addressing modes + their counters
    - cpu/alu.py:       16-bit results and flag arithmetic
    - mem/memory.py:    32K-word array
    - emu.py:           fetch/decode/execute loop
"""

__version__ = "1.0.0"

from .errors import SimulatorError, IllegalInstruction, MemoryFault, ProgramTooLarge
from .emu import PDP11Simulator, SimConfig, SimState, StopReason
from .stats import ExecutionStats


def run_program(text: str, config: SimConfig = None) -> PDP11Simulator:
    """Load octal program text, run it to completion, return the simulator."""
    sim = PDP11Simulator(config)
    sim.load_octal(text)
    sim.run()
    return sim
