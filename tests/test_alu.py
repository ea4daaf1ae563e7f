"""
PDP-11 Simulator — ALU flag arithmetic tests
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from pdp11_sim.cpu import alu
from pdp11_sim.cpu.regs import CC_N, CC_Z, CC_V, CC_C


def _bits(flags: int) -> str:
    return ''.join('1' if flags & m else '0' for m in (CC_N, CC_Z, CC_V, CC_C))


def _expected_sub(src: int, dst: int):
    """dst - src worked out with signed/unsigned ints instead of bit tricks."""
    result = (dst - src) % 0o200000
    flags = 0
    if result >= 0o100000:
        flags |= CC_N
    if result == 0:
        flags |= CC_Z
    src_neg, dst_neg, res_neg = src >= 0o100000, dst >= 0o100000, result >= 0o100000
    if src_neg != dst_neg and res_neg == src_neg:
        flags |= CC_V
    if dst < src:
        flags |= CC_C
    return result, flags


class TestAdd:

    def test_plain(self):
        assert alu.add16(5, 3) == (8, 0)

    def test_signed_overflow(self):
        """077777 + 1 → 100000, N V"""
        result, flags = alu.add16(0o077777, 1)
        assert result == 0o100000
        assert _bits(flags) == '1010'

    def test_carry_to_zero(self):
        """177777 + 1 → 0, Z C"""
        result, flags = alu.add16(0o177777, 1)
        assert result == 0
        assert _bits(flags) == '0101'

    def test_two_negatives_overflow(self):
        """100000 + 100000 → 0, Z V C"""
        result, flags = alu.add16(0o100000, 0o100000)
        assert result == 0
        assert _bits(flags) == '0111'


class TestSub:

    def test_borrow(self):
        """0 - 1 → 177777, N C"""
        result, flags = alu.sub16(1, 0)
        assert result == 0o177777
        assert _bits(flags) == '1001'

    def test_overflow(self):
        """100000 - 1 → 077777, V"""
        result, flags = alu.sub16(1, 0o100000)
        assert result == 0o077777
        assert _bits(flags) == '0010'

    @pytest.mark.parametrize("a,b", [
        (0, 0), (1, 2), (0o177777, 1), (0o100000, 0o077777),
        (0o123456, 0o054321), (0o070000, 0o170000),
    ])
    def test_add_then_sub_restores(self, a, b):
        """(a + b) - b == a and SUB's flags match an independent computation"""
        total, _ = alu.add16(b, a)
        result, flags = alu.sub16(b, total)
        assert result == a
        assert (result, flags) == _expected_sub(b, total)

    @pytest.mark.parametrize("b", [0, 1, 0o077777, 0o100000, 0o100001, 0o177777, 0o052525])
    def test_add_then_sub_restores_every_word(self, b):
        """For each b, (a + b) - b == a over all 16-bit a"""
        for a in range(0o200000):
            total, _ = alu.add16(b, a)
            result, flags = alu.sub16(b, total)
            assert (result, flags) == _expected_sub(b, total), oct(a)
            assert result == a, oct(a)


class TestCmp:

    def test_equal(self):
        assert alu.cmp16(0o1234, 0o1234) == (0, CC_Z)

    def test_equal_every_word(self):
        """CMP a,a → Z only, for all 16-bit a"""
        for a in range(0o200000):
            assert alu.cmp16(a, a) == (0, CC_Z), oct(a)

    def test_src_less(self):
        """CMP 0,1 → 177777, N C"""
        result, flags = alu.cmp16(0, 1)
        assert result == 0o177777
        assert _bits(flags) == '1001'

    def test_src_greater(self):
        result, flags = alu.cmp16(2, 1)
        assert result == 1
        assert _bits(flags) == '0000'

    def test_mixed_signs(self):
        """CMP 1,100000 → 100001, N C; V stays clear because sign(r) != sign(src)"""
        result, flags = alu.cmp16(1, 0o100000)
        assert result == 0o100001
        assert _bits(flags) == '1001'

    def test_operand_order_opposite_to_sub(self):
        assert alu.cmp16(5, 3)[0] == 2
        assert alu.sub16(5, 3)[0] == 0o177776


class TestShift:

    def test_asl_into_sign(self):
        result, flags = alu.asl16(0o040000, 0o040000)
        assert result == 0o100000
        assert _bits(flags) == '1010'

    def test_asl_out_of_sign(self):
        result, flags = alu.asl16(0o100000, 0o100000)
        assert result == 0
        assert _bits(flags) == '0111'

    def test_asl_carry_from_operand(self):
        """Result follows the register, C follows the operand"""
        result, flags = alu.asl16(1, 0o100000)
        assert result == 2
        assert _bits(flags) == '0011'

    def test_asr_sign_extends(self):
        result, flags = alu.asr16(0o100000, 0o100000)
        assert result == 0o140000
        assert _bits(flags) == '1010'

    def test_asr_minus_one(self):
        result, flags = alu.asr16(0o177777, 0o177777)
        assert result == 0o177777
        assert _bits(flags) == '1001'

    def test_asr_to_zero(self):
        result, flags = alu.asr16(1, 1)
        assert result == 0
        assert _bits(flags) == '0111'


class TestHelpers:

    def test_mov_flags(self):
        assert alu.mov_flags(0) == CC_Z
        assert alu.mov_flags(0o100000) == CC_N
        assert alu.mov_flags(5) == 0

    def test_sign_extend8(self):
        assert alu.sign_extend8(0o177) == 127
        assert alu.sign_extend8(0o200) == -128
        assert alu.sign_extend8(0o377) == -1

    def test_sign_extend16(self):
        assert alu.sign_extend16(0o077777) == 32767
        assert alu.sign_extend16(0o100000) == -32768
        assert alu.sign_extend16(0o177777) == -1
