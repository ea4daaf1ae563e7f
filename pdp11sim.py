#!/usr/bin/env python3
"""
pdp11sim — PDP-11 subset simulator CLI

Usage:
    python pdp11sim.py [-t | -v] < program.oct

The program is read from stdin as whitespace-separated octal words and
loaded from address 0. Execution starts at PC = 0 and runs until a halt
(all-zero) word.

    (no flag)  print execution statistics only
    -t         instruction trace
    -v         trace plus register dumps, operand values, results,
               nzvc bits, the loaded words and a 20-word memory dump

Only the first argument is looked at; anything else is ignored.
Exit status is 0 after a halt, 1 after a bad instruction or load error.

Examples:
    echo "012700 000005 062700 000003 000000" | python pdp11sim.py
    python pdp11sim.py -v < loop.oct
"""

import argparse
import sys
from typing import List, Optional, TextIO

from pdp11_sim import PDP11Simulator, SimConfig, StopReason, SimulatorError
from pdp11_sim.log_setup import setup_logging


def parse_flags(argv: List[str]) -> SimConfig:
    """Map the first command-line argument onto a SimConfig.

    Only an exact ``-t`` or ``-v`` counts; ``-tv``, ``-t5`` and anything
    else select the default statistics-only run.
    """
    first = argv[:1]
    if first not in (["-t"], ["-v"]):
        return SimConfig()
    parser = argparse.ArgumentParser(prog="pdp11sim", add_help=False)
    parser.add_argument("-t", dest="trace", action="store_true")
    parser.add_argument("-v", dest="verbose", action="store_true")
    args = parser.parse_args(first)
    return SimConfig(trace=args.trace, verbose=args.verbose)


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    stdin = stdin or sys.stdin
    out = stdout or sys.stdout

    setup_logging()
    config = parse_flags(argv)
    sim = PDP11Simulator(config, trace_stream=out)

    try:
        sim.load_octal(stdin.read())
    except SimulatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if config.trace:
        print("\ninstruction trace:", file=out)

    reason = sim.run()

    if reason is StopReason.ILLEGAL:
        prefix = "" if config.trace else "\n"
        print(f"{prefix}BAD INSTRUCTION AT PC = {sim.fault_pc:06o}", file=out)
        return 1

    if config.trace:
        print(file=out)
    out.write(sim.stats.report())
    if config.verbose:
        out.write("\n\n" + sim.memory_dump(20))
    out.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
