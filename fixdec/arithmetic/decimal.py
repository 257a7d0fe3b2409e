"""Deterministic fixed-point decimal numbers.

A Decimal is a triple (value, scale, negative): an unsigned 128-bit
magnitude, a count of implied decimal places, and a sign. The number it
represents is exactly (-1 if negative else 1) * value / 10**scale.

All arithmetic is on integers. Nothing here touches a float, except the
explicitly lossy __float__.

Two tiers of failure:
  - DecimalError subclasses (bad strings, mixed scales, ...) are ordinary
    errors for the caller to handle.
  - DecimalFault subclasses (overflow, division by zero, log of zero, ...)
    mean the operands were inconsistent with their scale or domain.
    They are not meant to be caught and recovered from.
"""

import logging
import re

import gmpy2 as gmp

from ..core import integral
from ..core import logmath
from ..core import rootmath
from ..core import tables
from ..core.integral import checked_add, checked_mul, checked_div
from ..core.ops import RM, LN
from ..core.utils import (
    ParseError, ParseEmptyError, ParseBaseError,
    DifferentScaleError, ExceedsRangeError, SignedDecimalsNotSupportedError,
    DomainFault, UnsupportedExponentFault,
)
from ..core.wide import U192
from .evalctx import default_ctx

logger = logging.getLogger(__name__)


MAX_SCALE = 255

_digits_re = re.compile(r'[0-9]+')
_exp_re = re.compile(r'[+-]?[0-9]+')

# digits in the largest 128-bit magnitude
_max_digits = len(str(integral.U128_MAX))


class Decimal(object):

    # the represented number is exactly (-1)**_negative * _value / 10**_scale
    _value : int = 0
    _scale : int = 0

    # zero is never negative
    _negative : bool = False

    @property
    def value(self):
        """Unsigned integer magnitude, at most 128 bits."""
        return self._value

    @property
    def scale(self):
        """Number of implied decimal places, 0 to 255."""
        return self._scale

    @property
    def negative(self):
        """The sign - is this value less than zero?"""
        return self._negative

    @property
    def denominator(self):
        """10**scale. Faults if that does not fit in 128 bits."""
        return integral.checked_pow10(self._scale, where='Decimal.denominator')

    def __init__(self, x=None, value=None, scale=None, negative=None):
        """Create a new decimal. The first argument, "x", is a decimal to
        clone and update, otherwise the default values (zero at scale 0)
        will be used. No normalization happens, apart from making zero
        non-negative.
        """
        if value is not None:
            self._value = value
        elif x is not None:
            self._value = x._value

        if scale is not None:
            self._scale = scale
        elif x is not None:
            self._scale = x._scale

        if negative is not None:
            self._negative = bool(negative)
        elif x is not None:
            self._negative = x._negative

        if not integral.fits(self._value, integral.U128_BITS):
            raise ExceedsRangeError('decimal value {} does not fit in {} bits'
                                    .format(repr(self._value), integral.U128_BITS))
        if not 0 <= self._scale <= MAX_SCALE:
            raise ExceedsRangeError('decimal scale {} is outside [0, {}]'
                                    .format(repr(self._scale), MAX_SCALE))

        if self._value == 0:
            self._negative = False

    # constructors

    @classmethod
    def from_integer(cls, integer):
        """Create a decimal from an unsigned integer, at scale 0."""
        if integer < 0:
            raise SignedDecimalsNotSupportedError('from_integer expects an unsigned integer, got {}'
                                                  .format(integer))
        return cls(value=int(integer), scale=0, negative=False)

    @classmethod
    def from_scaled_amount(cls, amount, scale):
        """Create a decimal from an unsigned amount that is already scaled,
        e.g. from_scaled_amount(1500000, 6) is 1.500000.
        """
        if amount < 0:
            raise SignedDecimalsNotSupportedError('from_scaled_amount expects an unsigned amount, got {}'
                                                  .format(amount))
        return cls(value=int(amount), scale=scale, negative=False)

    @classmethod
    def from_str(cls, s, radix=10):
        """Parse a decimal string: an optional leading minus, digits, an
        optional decimal point followed by digits, and an optional exponent
        ([eE][+-]?digits).

        Without a positive exponent, the number of digits after the point
        (plus the magnitude of a negative exponent) becomes the scale.
        With a positive exponent k the result has scale k: "1.5e6" is
        1500000.000000.
        """
        if radix != 10:
            raise ParseBaseError('unable to parse non base 10 input: radix {}'.format(repr(radix)))

        # split into base and exponent parts
        loc = min((i for i in (s.find('e'), s.find('E')) if i >= 0), default=-1)
        if loc == -1:
            base, exp = s, 0
        else:
            base, exp_s = s[:loc], s[loc + 1:]
            if _exp_re.fullmatch(exp_s) is None:
                raise ParseError('unable to parse exponent of {}'.format(repr(s)))
            # any exponent of four or more digits puts the scale past MAX_SCALE
            if len(exp_s.lstrip('+-').lstrip('0')) > 3:
                raise ExceedsRangeError('{} exceeds the range of a decimal'.format(repr(s)))
            exp = int(exp_s)

        if not base:
            raise ParseEmptyError('unable to parse empty input {}'.format(repr(s)))

        # the sign may only come first
        minus = base.find('-')
        if minus == 0:
            base = base[1:]
            negative = True
        elif minus > 0:
            raise ParseError('misplaced sign in {}'.format(repr(s)))
        else:
            negative = False

        if not base:
            raise ParseEmptyError('unable to parse empty input {}'.format(repr(s)))

        point = base.find('.')
        if point == -1:
            lead, trail = base, ''
        else:
            lead, trail = base[:point], base[point + 1:]
            if not trail:
                raise ParseError('no digits after the decimal point in {}'.format(repr(s)))

        if _digits_re.fullmatch(lead) is None or (trail and _digits_re.fullmatch(trail) is None):
            raise ParseError('unable to parse input {}'.format(repr(s)))

        offset = len(trail)

        # the scale is an 8-bit field; reject before building any power of ten
        if exp > MAX_SCALE or (exp <= 0 and offset - exp > MAX_SCALE):
            raise ExceedsRangeError('{} exceeds the range of a decimal'.format(repr(s)))

        if exp > 0:
            # rescale the base from offset places to exp places, then
            # multiply out the exponent at that scale
            trail = trail[:exp]
            digits = (lead + trail + '0' * (exp - len(trail))).lstrip('0')
            scale = exp
        else:
            digits = (lead + trail).lstrip('0')
            scale = offset - exp

        if len(digits) > _max_digits:
            raise ExceedsRangeError('{} exceeds the range of a decimal'.format(repr(s)))

        value = int(digits or '0')
        if exp > 0:
            value *= 10 ** exp

        if not integral.fits(value, integral.U128_BITS):
            raise ExceedsRangeError('{} exceeds the range of a decimal'.format(repr(s)))

        return cls(value=value, scale=scale, negative=negative)

    @classmethod
    def zero(cls):
        return cls(value=0, scale=tables.COMPUTE_SCALE)

    @classmethod
    def one(cls):
        return cls(value=tables.COMPUTE_DENOMINATOR, scale=tables.COMPUTE_SCALE)

    @classmethod
    def two(cls):
        return cls(value=2 * tables.COMPUTE_DENOMINATOR, scale=tables.COMPUTE_SCALE)

    # representation

    def __repr__(self):
        return '{}(value={}, scale={}, negative={})'.format(
            type(self).__name__, repr(self._value), repr(self._scale), repr(self._negative),
        )

    def __str__(self):
        scale = self._scale
        rep = str(self._value)
        length = len(rep)

        # inject decimal point
        if scale > 0:
            if scale > length:
                rep = '0.' + ('0' * (scale - length)) + rep
            elif scale == length:
                rep = '0.' + rep
            else:
                rep = rep[:length - scale] + '.' + rep[length - scale:]

        if self._negative:
            return '-' + rep
        else:
            return rep

    def __float__(self):
        """Lossy: the nearest double to the exact rational value."""
        f = float(gmp.mpq(self._value, self.denominator))
        if self._negative:
            return -f
        else:
            return f

    def is_identical_to(self, other):
        """Is this value encoded identically to some other value?
        This is stricter than eq(), which is defined only for equal scales.
        """
        return (
            self._value == other._value
            and self._scale == other._scale
            and self._negative == other._negative
        )

    # structural equality (value, scale and sign);
    # numeric comparison is eq()/lt()/... below
    def __eq__(self, other):
        if isinstance(other, Decimal):
            return self.is_identical_to(other)
        return NotImplemented

    def __hash__(self):
        return hash((self._value, self._scale, self._negative))

    # predicates

    def is_zero(self):
        return self._value == 0

    def is_positive(self):
        """True if strictly greater than zero."""
        return not self._negative and self._value != 0

    def is_negative(self):
        """True if strictly less than zero."""
        return self._negative and self._value != 0

    def is_integer(self):
        """True if there is nothing after the decimal point."""
        return self._value % self.denominator == 0

    # scale conversion

    def to_scale(self, scale):
        """Change the number of decimal places. Going down truncates the
        magnitude (toward zero).
        """
        if scale == self._scale:
            value = self._value
        elif scale < self._scale:
            value = checked_div(self._value,
                                integral.checked_pow10(self._scale - scale, 'Decimal.to_scale'),
                                'Decimal.to_scale')
        else:
            value = checked_mul(self._value,
                                integral.checked_pow10(scale - self._scale, 'Decimal.to_scale'),
                                'Decimal.to_scale')
        return type(self)(self, value=value, scale=scale)

    def to_scale_up(self, scale):
        """Change the number of decimal places. Going down rounds the
        magnitude up (away from zero). The sign is kept.
        """
        rescaled = type(self)(self, scale=scale)
        if self._scale >= scale:
            factor = type(self)(value=integral.checked_pow10(self._scale - scale, 'Decimal.to_scale_up'))
            return rescaled.div_up(factor)
        else:
            factor = type(self)(value=integral.checked_pow10(scale - self._scale, 'Decimal.to_scale_up'))
            return rescaled.mul_up(factor)

    def to_compute_scale(self):
        return self.to_scale(tables.COMPUTE_SCALE)

    def _narrow_to(self, scale, ctx):
        if ctx.rm == RM.RAZ:
            return self.to_scale_up(scale)
        else:
            return self.to_scale(scale)

    # narrowing accessors

    def to_scaled_amount(self, scale):
        """Magnitude at the given scale, truncated, as a 64-bit unsigned int."""
        return integral.narrow(self.to_scale(scale)._value, integral.U64_BITS, 'Decimal.to_scaled_amount')

    def to_scaled_amount_up(self, scale):
        """Magnitude at the given scale, rounded up, as a 64-bit unsigned int."""
        return integral.narrow(self.to_scale_up(scale)._value, integral.U64_BITS, 'Decimal.to_scaled_amount_up')

    def abs(self):
        """Absolute value, truncated to an integer, as a 64-bit unsigned int."""
        return self.to_scaled_amount(0)

    def abs_up(self):
        """Absolute value, rounded up to an integer, as a 64-bit unsigned int."""
        return self.to_scaled_amount_up(0)

    # comparison

    def _check_scale(self, other, fname):
        if self._scale != other._scale:
            raise DifferentScaleError('{}: scale {} does not match scale {}'
                                      .format(fname, self._scale, other._scale))

    def eq(self, other):
        self._check_scale(other, 'eq')
        return self._value == other._value and self._negative == other._negative

    def lt(self, other):
        self._check_scale(other, 'lt')
        if self._negative and other._negative:
            return self._value > other._value
        elif self._negative and not other._negative:
            return True
        elif not self._negative and other._negative:
            return False
        else:
            return self._value < other._value

    def gt(self, other):
        self._check_scale(other, 'gt')
        if self._negative and other._negative:
            return self._value < other._value
        elif self._negative and not other._negative:
            return False
        elif not self._negative and other._negative:
            return True
        else:
            return self._value > other._value

    def lte(self, other):
        self._check_scale(other, 'lte')
        if self._negative and other._negative:
            return self._value >= other._value
        elif self._negative and not other._negative:
            return True
        elif not self._negative and other._negative:
            return False
        else:
            return self._value <= other._value

    def gte(self, other):
        self._check_scale(other, 'gte')
        if self._negative and other._negative:
            return self._value <= other._value
        elif self._negative and not other._negative:
            return False
        elif not self._negative and other._negative:
            return True
        else:
            return self._value >= other._value

    def min(self, other):
        if self.lte(other):
            return self
        else:
            return other

    def max(self, other):
        if self.gte(other):
            return self
        else:
            return other

    def almost_eq(self, other, precision):
        """Are the two values within precision units (of the common scale)
        of each other? The difference is signed: -1 and 1 are 2 apart.
        """
        self._check_scale(other, 'almost_eq')
        return self.sub(other)._value < precision

    # arithmetic

    def neg(self):
        if self._value == 0:
            return self
        return type(self)(self, negative=not self._negative)

    def add(self, other):
        self._check_scale(other, 'add')
        if self._negative == other._negative:
            # same sign: add magnitudes, keep the sign
            value = checked_add(self._value, other._value, 'Decimal.add')
            negative = self._negative
        elif self._value > other._value:
            # e.g: 4 + (-3) = 1 ; -4 + 3 = -1
            value = self._value - other._value
            negative = self._negative
        elif self._value < other._value:
            # e.g: 2 + (-5) = -3 ; -2 + 5 = 3
            value = other._value - self._value
            negative = other._negative
        else:
            value = 0
            negative = False
        return type(self)(value=value, scale=self._scale, negative=negative)

    def sub(self, other):
        self._check_scale(other, 'sub')
        # a - b is a + (-b)
        return self.add(type(self)(other, negative=not other._negative))

    def mul(self, other):
        """Product at the scale of self, truncated."""
        value = checked_div(checked_mul(self._value, other._value, 'Decimal.mul'),
                            other.denominator, 'Decimal.mul')
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    def mul_up(self, other):
        """Product at the scale of self, with the magnitude rounded up."""
        denominator = other.denominator
        value = checked_div(checked_add(checked_mul(self._value, other._value, 'Decimal.mul_up'),
                                        denominator - 1, 'Decimal.mul_up'),
                            denominator, 'Decimal.mul_up')
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    def div(self, other):
        """Quotient at the scale of self, truncated."""
        value = checked_div(checked_mul(self._value, other.denominator, 'Decimal.div'),
                            other._value, 'Decimal.div')
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    def div_up(self, other):
        """Quotient at the scale of self, with the magnitude rounded up."""
        if other._value == 0:
            # surfaces as a division by zero rather than an underflow of value - 1
            checked_div(self._value, 0, 'Decimal.div_up')
        value = checked_div(checked_add(checked_mul(self._value, other.denominator, 'Decimal.div_up'),
                                        other._value - 1, 'Decimal.div_up'),
                            other._value, 'Decimal.div_up')
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    # extended precision: same results as mul and div, but the intermediate
    # product is held in 192 bits, so only the final result needs to fit

    def big_mul(self, other):
        product = U192(self._value).checked_mul(other._value)
        value = product.checked_div(other.denominator).narrow()
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    def big_div(self, other):
        numerator = U192(self._value).checked_mul(other.denominator)
        value = numerator.checked_div(other._value).narrow()
        return type(self)(value=value, scale=self._scale, negative=self._negative != other._negative)

    def square(self):
        return self.big_mul(self)

    def msb(self):
        """Index of the most significant set bit, counted from the top of
        the 128-bit magnitude (leading zeros - 1).
        """
        if self._value == 0:
            raise DomainFault('msb of zero is undefined')
        return integral.leading_zeros(self._value) - 1

    # square root

    def sqrt(self):
        """Square root, at the scale of self, truncated (to within one unit)."""
        if self._negative:
            raise SignedDecimalsNotSupportedError('sqrt of negative value {}'.format(str(self)))

        if self._value == 0 or self._value == self.denominator:
            return self

        value = rootmath.sqrt_scaled(self._value, self._scale)
        return type(self)(value=value, scale=self._scale)

    # logarithms: the operand is normalized onto the compute scale, the
    # kernel evaluated there, and the result narrowed to the scale of self
    # according to the context

    def _log(self, fname, kernel, unit, ctx, low=1, high=integral.U128_MAX):
        if ctx is None:
            ctx = default_ctx
        if self._negative or self._value == 0:
            raise DomainFault('{}: operand must be greater than zero, got {}'.format(fname, str(self)))

        x, e = logmath.normalize(self._value, self._scale, low=low, high=high)
        magnitude, negative = logmath.shift(*kernel(x), e, unit)

        result = type(self)(value=magnitude, scale=tables.COMPUTE_SCALE, negative=negative)
        return result._narrow_to(self._scale, ctx)

    def log2(self, ctx=None):
        return self._log('log2', logmath.log2, tables.LOG2_10, ctx)

    def log10(self, ctx=None):
        return self._log('log10', logmath.log10, tables.COMPUTE_DENOMINATOR, ctx)

    def ln(self, ctx=None):
        """Natural logarithm, by the strategy the context selects
        (iterative log2 by default).
        """
        if ctx is None:
            ctx = default_ctx
        if ctx.ln == LN.TABLE:
            return self.ln_table(ctx=ctx)
        return self._log('ln', logmath.ln, tables.LN_10, ctx)

    def ln_table(self, ctx=None):
        """Natural logarithm by table lookup. Constant time, but slightly
        less accurate than ln() in the last few places.
        """
        return self._log('ln_table', logmath.ln_table, tables.LN_10, ctx,
                         low=logmath.LN_TABLE_MIN_OPERAND, high=logmath.LN_TABLE_MAX_OPERAND)

    def bit_length(self):
        """(n, negative) with 2**n (or 2**-n when negative) the largest
        power of two not exceeding self.
        """
        if self._negative:
            raise DomainFault('bit_length: operand must not be negative, got {}'.format(str(self)))
        return logmath.bit_length(self._value, self._scale)

    # powers

    def pow(self, exp, ctx=None):
        """Raise to an exponent, returned at the scale of self.

        An int exponent uses square-and-multiply. A Decimal exponent must be
        an integer or one of +-0.25, +-0.5, +-1, +-1.25, +-1.5, +-2, which
        are built from sqrt, mul and reciprocal; anything else faults.
        """
        if isinstance(exp, Decimal):
            return self._pow_decimal(exp, ctx)
        elif exp < 0:
            raise SignedDecimalsNotSupportedError('integer exponent must be unsigned, got {}'.format(exp))
        else:
            return self._pow_int(int(exp))

    def _pow_int(self, exp):
        one = type(self).one().to_scale(self._scale)

        base = self
        result = one
        steps = 0

        while exp > 0:
            if exp % 2 != 0:
                result = result.big_mul(base)
            exp //= 2
            if exp > 0:
                base = base.big_mul(base)
            steps += 1

        logger.debug('integer power in %d steps', steps)
        return result

    def _pow_decimal(self, exp, ctx):
        if ctx is None:
            ctx = default_ctx

        cls = type(self)
        one = cls.one()
        base = self.to_compute_scale()
        # only exponents exact at compute scale are recognized
        excess = exp._scale - tables.COMPUTE_SCALE
        if excess > 0 and exp._value % (10 ** excess) != 0:
            raise UnsupportedExponentFault('pow not implemented for exponent {}'.format(str(exp)))

        x = exp.to_compute_scale()

        if x.is_zero():
            # x^0 = 1
            result = one
        elif x.is_negative():
            # x^-y = 1/x^y
            result = one.div(base._pow_decimal(x.neg(), ctx).to_compute_scale())
        elif x.eq(_zero_point_two_five):
            # x^0.25 = sqrt(sqrt(x))
            result = base.sqrt().sqrt()
        elif x.eq(_zero_point_five):
            result = base.sqrt()
        elif x.eq(one):
            result = base
        elif x.eq(_one_point_two_five):
            # x^1.25 = x * sqrt(sqrt(x))
            result = base.mul(base.sqrt().sqrt())
        elif x.eq(_one_point_five):
            # x^1.5 = x * sqrt(x)
            result = base.mul(base.sqrt())
        elif x.eq(cls.two()):
            result = base.mul(base)
        elif x.is_integer():
            result = base._pow_int(x.abs())
        else:
            raise UnsupportedExponentFault('pow not implemented for exponent {}'.format(str(exp)))

        return result._narrow_to(self._scale, ctx)


_zero_point_two_five = Decimal(value=250000000000, scale=tables.COMPUTE_SCALE)
_zero_point_five = Decimal(value=500000000000, scale=tables.COMPUTE_SCALE)
_one_point_two_five = Decimal(value=1250000000000, scale=tables.COMPUTE_SCALE)
_one_point_five = Decimal(value=1500000000000, scale=tables.COMPUTE_SCALE)
