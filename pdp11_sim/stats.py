"""
PDP-11 Simulator — Execution Statistics

Six counters updated as a side effect of operand resolution and
instruction execution. They only ever grow; a fresh simulator (or
reset()) starts them at zero.
"""

from dataclasses import dataclass


@dataclass
class ExecutionStats:
    instructions_executed: int = 0
    instruction_words_fetched: int = 0
    data_words_read: int = 0
    data_words_written: int = 0
    branches_executed: int = 0
    branches_taken: int = 0

    @property
    def taken_percent(self) -> float:
        """Share of executed branches that were taken, 0.0 if none ran."""
        if not self.branches_executed:
            return 0.0
        return self.branches_taken / self.branches_executed * 100

    def report(self) -> str:
        """Statistics block printed at the end of a run.

        The percentage is only shown when at least one branch executed.
        """
        taken = f"  branches taken            = {self.branches_taken}"
        if self.branches_executed:
            taken += f" ({self.taken_percent:.1f}%)"
        return '\n'.join([
            "execution statistics (in decimal):",
            f"  instructions executed     = {self.instructions_executed}",
            f"  instruction words fetched = {self.instruction_words_fetched}",
            f"  data words read           = {self.data_words_read}",
            f"  data words written        = {self.data_words_written}",
            f"  branches executed         = {self.branches_executed}",
            taken,
        ])

    def reset(self):
        self.instructions_executed = 0
        self.instruction_words_fetched = 0
        self.data_words_read = 0
        self.data_words_written = 0
        self.branches_executed = 0
        self.branches_taken = 0
