"""
PDP-11 Simulator — Octal Program Loader

Programs arrive as whitespace-separated octal words, e.g.::

    012700 000005
    062700 000003
    000000

Reading stops at the first token that does not start with an octal
number, the way ``scanf("%o")`` stops: ``"17x 5"`` yields [0o17] and
nothing after it. Values are taken modulo 2**16.
"""

import logging
import re
from typing import List

from .cpu.regs import WORD_MASK

log = logging.getLogger(__name__)

_OCTAL_TOKEN = re.compile(r'\s*([+-]?[0-7]+)')


def parse_octal_words(text: str) -> List[int]:
    """Parse octal words from ``text`` until end of input or a bad token."""
    words = []
    pos = 0
    while True:
        match = _OCTAL_TOKEN.match(text, pos)
        if match is None:
            break
        words.append(int(match.group(1), 8) & WORD_MASK)
        pos = match.end()

    rest = text[pos:].strip()
    if rest:
        log.warning("Stopped loading at unparseable input %r after %d words",
                    rest.split()[0], len(words))
    return words


def format_echo(words: List[int]) -> List[str]:
    """Verbose-mode echo of the loaded words."""
    return ["reading words in octal from stdin:"] + \
        [f"  0{word:06o}" for word in words]
