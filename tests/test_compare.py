"""Ordering of signed decimals at a common scale."""

import random

import pytest

from fixdec import Decimal
from fixdec.core.utils import DifferentScaleError


def dec(value, scale, negative=False):
    return Decimal(value=value, scale=scale, negative=negative)


def signed(d):
    return -d.value if d.negative else d.value


one = dec(100, 2)
two = dec(200, 2)
minus_one = dec(100, 2, True)
minus_two = dec(200, 2, True)


class TestCompare:

    @pytest.mark.parametrize('a, b, lt', [
        (minus_two, minus_one, True),
        (minus_one, minus_two, False),
        (minus_one, one, True),
        (one, minus_one, False),
        (one, two, True),
        (two, one, False),
        (one, one, False),
        (minus_one, minus_one, False),
    ])
    def test_sign_matrix(self, a, b, lt):
        assert a.lt(b) == lt
        assert b.gt(a) == lt
        assert a.gte(b) == (not lt)
        assert b.lte(a) == (not lt)

    def test_eq(self):
        assert one.eq(dec(100, 2))
        assert not one.eq(minus_one)
        assert dec(0, 2).eq(dec(0, 2, True))

    @pytest.mark.parametrize('fname', ['eq', 'lt', 'gt', 'lte', 'gte', 'min', 'max'])
    def test_different_scales(self, fname):
        with pytest.raises(DifferentScaleError):
            getattr(dec(1, 2), fname)(dec(10, 3))

    def test_min_max(self):
        assert one.min(minus_two) is minus_two
        assert one.max(minus_two) is one
        assert minus_one.max(minus_two) is minus_one
        assert two.min(one) is one

    def test_almost_eq(self):
        assert dec(100, 2).almost_eq(dec(101, 2), 2)
        assert not dec(100, 2).almost_eq(dec(101, 2), 1)
        assert dec(100, 2).almost_eq(dec(100, 2), 1)
        # the distance from -1 to 1 is 2 units
        assert not dec(1, 2, True).almost_eq(dec(1, 2), 2)
        assert dec(1, 2, True).almost_eq(dec(1, 2), 3)
        with pytest.raises(DifferentScaleError):
            dec(1, 2).almost_eq(dec(1, 3), 10)

    def test_random_ordering(self):
        rng = random.Random(0xdec)
        for _ in range(500):
            a = dec(rng.randrange(1000), 3, rng.random() < 0.5)
            b = dec(rng.randrange(1000), 3, rng.random() < 0.5)
            x, y = signed(a), signed(b)
            assert a.lt(b) == (x < y)
            assert a.gt(b) == (x > y)
            assert a.lte(b) == (x <= y)
            assert a.gte(b) == (x >= y)
            assert a.eq(b) == (x == y)
            # exactly one of <, =, > holds
            assert [a.lt(b), a.eq(b), a.gt(b)].count(True) == 1
