"""Powers with integer and decimal exponents."""

import random

import pytest

from fixdec import Decimal, DecimalCtx, RM
from fixdec.core.utils import SignedDecimalsNotSupportedError, UnsupportedExponentFault, DivisionByZeroFault


def dec(value, scale, negative=False):
    return Decimal(value=value, scale=scale, negative=negative)


class TestIntegerExponent:

    def test_zero_base(self):
        assert dec(0, 6).pow(100).is_identical_to(dec(0, 6))

    def test_zero_exponent(self):
        base = Decimal.from_integer(10).to_scale(6)
        assert base.pow(0).is_identical_to(dec(1000000, 6))

    def test_powers_of_two(self):
        base = Decimal.from_integer(2).to_scale(6)
        assert base.pow(18).is_identical_to(Decimal.from_integer(262144).to_scale(6))

    def test_negative_base_squared(self):
        expected = Decimal.from_str('0.000002131173')
        assert Decimal.from_str('-0.001459854015').pow(2).is_identical_to(expected)

        base = Decimal.from_integer(3420).to_compute_scale().div(Decimal.from_integer(3425).to_compute_scale())
        base = base.sub(Decimal.one())
        assert base.pow(2).is_identical_to(expected)

    def test_odd_power_keeps_sign(self):
        assert dec(2, 0, True).pow(3).is_identical_to(dec(8, 0, True))

    def test_truncation(self):
        assert dec(341200000, 8).pow(8).is_identical_to(dec(1836843602280, 8))

    def test_negative_exponent(self):
        with pytest.raises(SignedDecimalsNotSupportedError):
            dec(2, 0).pow(-1)

    def test_random_against_ints(self):
        rng = random.Random(5)
        for _ in range(200):
            k = rng.randrange(0, 100)
            n = rng.randrange(0, 10)
            assert dec(k, 0).pow(n).value == k ** n


class TestDecimalExponent:

    @pytest.mark.parametrize('exp, expected', [
        (dec(250000, 6, True), 392814),
        (dec(1000000, 6, True), 23809),
        (dec(2000000, 6, True), 566),
        (dec(3000000, 6, True), 13),
        (dec(0, 6), 1000000),
        (dec(3000000, 6), 74088000000),
    ])
    def test_scale_6(self, exp, expected):
        base = dec(42000000, 6)
        assert base.pow(exp).is_identical_to(dec(expected, 6))

    @pytest.mark.parametrize('exp, expected', [
        (250000000000, 2545729895021),
        (500000000000, 6480740698407),
        (1000000000000, 42000000000000),
        (1250000000000, 106920655590882),
        (1500000000000, 272191109333094),
        (2000000000000, 1764000000000000),
    ])
    def test_scale_12(self, exp, expected):
        base = dec(42000000000000, 12)
        assert base.pow(dec(exp, 12)).is_identical_to(dec(expected, 12))

    def test_exponent_scale_does_not_matter(self):
        base = dec(42000000000000, 12)
        assert base.pow(Decimal.from_str('1.5')).is_identical_to(dec(272191109333094, 12))

    def test_rounding(self):
        base = dec(42000000, 6)
        exp = Decimal.from_str('1.5')
        assert base.pow(exp).is_identical_to(dec(272191109, 6))
        assert base.pow(exp, DecimalCtx(rm=RM.RAZ)).is_identical_to(dec(272191110, 6))

    @pytest.mark.parametrize('s', ['0.3', '1.75', '-0.1', '2.5'])
    def test_unsupported(self, s):
        with pytest.raises(UnsupportedExponentFault):
            dec(42000000, 6).pow(Decimal.from_str(s))

    def test_digits_past_compute_scale(self):
        base = dec(42000000, 6)
        with pytest.raises(UnsupportedExponentFault):
            base.pow(Decimal.from_str('0.2500000000001'))
        exact = Decimal.from_str('0.2500000000000')
        assert exact.scale == 13
        assert base.pow(exact).is_identical_to(base.pow(dec(250000, 6)))

    def test_reciprocal_of_zero(self):
        with pytest.raises(DivisionByZeroFault):
            dec(0, 6).pow(Decimal.from_str('-1'))


class TestIdentities:

    def test_random(self):
        one = Decimal.from_str('1')
        two = Decimal.from_str('2')
        rng = random.Random(8)
        for _ in range(200):
            x = dec(rng.getrandbits(40), 6, rng.random() < 0.5)
            assert x.pow(0).eq(dec(1000000, 6))
            assert x.pow(1).is_identical_to(x)
            assert x.pow(2).is_identical_to(x.mul(x))
            assert x.pow(one).is_identical_to(x)
            assert x.pow(two).is_identical_to(x.mul(x))
