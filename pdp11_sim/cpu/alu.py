"""
PDP-11 Simulator — ALU Operations

Each function returns (result, flags): the 16-bit result and the
condition code bits it produces. The caller decides which flag group to
apply (NZVC for arithmetic and shifts, NZV for MOV, which leaves C alone).

Flag formulas (verbose traces print the nzvc bits, so these are exact):

  CMP: r = src - dst       C = bit 16 of the unmasked difference
                           V = src/dst signs differ AND sign(r) == sign(src)
  SUB: r = dst - src       C = bit 16 of the unmasked difference
                           V = same formula as CMP (src/dst roles unchanged)
  ADD: r = src + dst       C = masked r < unmasked sum
                           V = src/dst signs equal AND sign(r) differs
  ASL/ASR:                 V = N xor C

SUB shares CMP's V rule rather than the textbook PDP-11 rule for SUB.
"""

from .regs import WORD_MASK, SIGN_BIT, CC_N, CC_Z, CC_V, CC_C


def nz16(val: int) -> int:
    """Test 16-bit value for N and Z flags only."""
    flags = 0
    if val & SIGN_BIT:
        flags |= CC_N
    if not (val & WORD_MASK):
        flags |= CC_Z
    return flags


def _sub_overflow(src: int, dst: int, result: int) -> int:
    if (src & SIGN_BIT) != (dst & SIGN_BIT) and \
            (src & SIGN_BIT) == (result & SIGN_BIT):
        return CC_V
    return 0


def cmp16(src: int, dst: int) -> tuple:
    """Compare src with dst (src - dst). Sets N, Z, V, C. No write-back."""
    diff = src - dst
    flags = CC_C if (diff >> 16) & 1 else 0
    result = diff & WORD_MASK
    flags |= nz16(result)
    flags |= _sub_overflow(src, dst, result)
    return (result, flags)


def sub16(src: int, dst: int) -> tuple:
    """Subtract src from dst (dst - src). Sets N, Z, V, C."""
    diff = dst - src
    flags = CC_C if (diff >> 16) & 1 else 0
    result = diff & WORD_MASK
    flags |= nz16(result)
    flags |= _sub_overflow(src, dst, result)
    return (result, flags)


def add16(src: int, dst: int) -> tuple:
    """Add src to dst. Sets N, Z, V, C."""
    total = src + dst
    result = total & WORD_MASK
    flags = nz16(result)
    if (src & SIGN_BIT) == (dst & SIGN_BIT) and \
            (src & SIGN_BIT) != (result & SIGN_BIT):
        flags |= CC_V
    if result < total:
        flags |= CC_C
    return (result, flags)


def asl16(val: int, operand: int) -> tuple:
    """Arithmetic shift left of a register value. Sets N, Z, V, C.

    The result comes from ``val`` (the destination register) while C is
    bit 15 of ``operand`` (the resolved destination value). The two are
    the same word unless the destination mode is not Register.
    """
    result = (val << 1) & WORD_MASK
    flags = nz16(result)
    n = 1 if flags & CC_N else 0
    c = 1 if operand & SIGN_BIT else 0
    if c:
        flags |= CC_C
    if n ^ c:
        flags |= CC_V
    return (result, flags)


def asr16(val: int, operand: int) -> tuple:
    """Arithmetic shift right (sign-extending). Sets N, Z, V, C.

    Same register/operand split as asl16; C is bit 0 of ``operand``.
    """
    result = (sign_extend16(val) >> 1) & WORD_MASK
    flags = nz16(result)
    n = 1 if flags & CC_N else 0
    c = operand & 1
    if c:
        flags |= CC_C
    if n ^ c:
        flags |= CC_V
    return (result, flags)


def mov_flags(val: int) -> int:
    """N and Z from the moved value, V cleared. Apply with set_NZV."""
    return nz16(val)


# ══════════════════════════════════════════════
# Sign extension
# ══════════════════════════════════════════════

def sign_extend8(val: int) -> int:
    """Convert an 8-bit branch offset to a signed Python int."""
    val &= 0o377
    if val & 0o200:
        return val - 0o400
    return val


def sign_extend16(val: int) -> int:
    """Convert an unsigned 16-bit word to a signed Python int."""
    val &= WORD_MASK
    if val & SIGN_BIT:
        return val - 0o200000
    return val
