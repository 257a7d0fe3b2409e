"""Checked native-width helpers and the U192 / U256 scratch integers."""

import random

import pytest

from fixdec.core import integral
from fixdec.core.integral import U64_MAX, U128_MAX
from fixdec.core.utils import OverflowFault, NarrowingFault, DivisionByZeroFault, DecimalFault
from fixdec.core.wide import U192, U256


class TestIntegral:

    def test_checked_add(self):
        assert integral.checked_add(U128_MAX - 1, 1) == U128_MAX
        with pytest.raises(OverflowFault):
            integral.checked_add(U128_MAX, 1)

    def test_checked_sub_underflow(self):
        assert integral.checked_sub(2, 2) == 0
        with pytest.raises(OverflowFault):
            integral.checked_sub(1, 2)

    def test_checked_mul(self):
        assert integral.checked_mul(1 << 64, (1 << 64) - 1) == (1 << 128) - (1 << 64)
        with pytest.raises(OverflowFault):
            integral.checked_mul(1 << 64, 1 << 64)

    def test_checked_div_by_zero(self):
        assert integral.checked_div(7, 2) == 3
        with pytest.raises(DivisionByZeroFault):
            integral.checked_div(7, 0)

    def test_faults_are_builtin_errors_too(self):
        with pytest.raises(ZeroDivisionError):
            integral.checked_div(1, 0)
        with pytest.raises(OverflowError):
            integral.checked_add(U128_MAX, U128_MAX)

    def test_checked_pow10(self):
        assert integral.checked_pow10(0) == 1
        assert integral.checked_pow10(38) == 10 ** 38
        with pytest.raises(OverflowFault):
            integral.checked_pow10(39)
        with pytest.raises(OverflowFault):
            integral.checked_pow10(-1)

    def test_narrow(self):
        assert integral.narrow(U64_MAX) == U64_MAX
        with pytest.raises(NarrowingFault):
            integral.narrow(U64_MAX + 1)
        assert integral.narrow(U128_MAX, 128) == U128_MAX

    def test_narrowing_is_an_overflow(self):
        with pytest.raises(OverflowFault):
            integral.narrow(1 << 64)

    @pytest.mark.parametrize('x, expected', [
        (0, 128),
        (1, 127),
        (U64_MAX, 64),
        (U128_MAX, 0),
    ])
    def test_leading_zeros(self, x, expected):
        assert integral.leading_zeros(x) == expected

    def test_floorlog2(self):
        assert integral.floorlog2(0) == 0
        assert integral.floorlog2(1) == 0
        assert integral.floorlog2(1023) == 9
        assert integral.floorlog2(1024) == 10


class TestWide:

    def test_construction_checks_width(self):
        assert int(U192((1 << 192) - 1)) == (1 << 192) - 1
        with pytest.raises(OverflowFault):
            U192(1 << 192)
        with pytest.raises(OverflowFault):
            U256(-1)

    def test_mul_fits_192(self):
        assert U192(U128_MAX).checked_mul(1 << 64) == (U128_MAX << 64)
        with pytest.raises(OverflowFault):
            U192(1 << 191).checked_mul(2)

    def test_mul_fits_256(self):
        product = U256(U128_MAX).checked_mul(U128_MAX)
        assert product == U128_MAX * U128_MAX
        with pytest.raises(NarrowingFault):
            product.narrow()

    def test_narrow(self):
        assert U192(U128_MAX).narrow() == U128_MAX
        assert U192(U64_MAX).narrow(64) == U64_MAX
        with pytest.raises(NarrowingFault):
            U192(U128_MAX).checked_add(1).narrow()

    def test_sub_underflow(self):
        with pytest.raises(OverflowFault):
            U192(1).checked_sub(U192(2))

    def test_div(self):
        assert U192(100).checked_div(7) == 14
        with pytest.raises(DivisionByZeroFault):
            U192(100).checked_div(U192(0))

    def test_pow(self):
        assert U192(2).checked_pow(191) == 1 << 191
        assert U192(10).checked_pow(57) == 10 ** 57
        assert U192(1).checked_pow(1000) == 1
        with pytest.raises(OverflowFault):
            U192(2).checked_pow(192)
        with pytest.raises(OverflowFault):
            U192(10).checked_pow(58)

    def test_shr(self):
        assert U192(1 << 100).shr(100) == 1

    def test_bits(self):
        assert U192(0).is_zero()
        assert U192(0).leading_zeros() == 192
        assert U256(1).leading_zeros() == 255
        assert U192(U128_MAX).bit_length() == 128

    def test_comparison_across_widths(self):
        assert U192(5) == 5
        assert U192(5) != 6
        assert U192(5) < U256(6)
        assert U256(7) >= U192(7)
        assert hash(U192(5)) == hash(U256(5))

    def test_faults_are_not_plain_errors(self):
        with pytest.raises(DecimalFault):
            U192(1 << 192)

    def test_random_products(self):
        rng = random.Random(20260101)
        for _ in range(200):
            a = rng.getrandbits(96)
            b = rng.getrandbits(96)
            assert U192(a).checked_mul(b) == a * b
            if b != 0:
                assert U192(a).checked_mul(b).checked_div(b) == a
