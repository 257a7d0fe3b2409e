"""Extended-width unsigned integers.

These are scratch space for the multiply, divide and square root kernels:
an intermediate product of two 128-bit magnitudes can need up to 256 bits.
The widths are fixed, arithmetic is checked (it faults instead of wrapping),
and the only way back to a native magnitude is narrow(), which faults if
the value does not fit.

The integer itself is a gmpy2 mpz; the width is a class property.
"""

import gmpy2 as gmp

from . import integral
from .utils import OverflowFault, NarrowingFault, DivisionByZeroFault


class WideUInt(object):
    """Unsigned integer of a fixed width. Subclasses set nbits."""

    nbits : int = 0

    _v = gmp.mpz(0)

    def __init__(self, x=0):
        if isinstance(x, WideUInt):
            v = x._v
        else:
            v = gmp.mpz(x)
        if v < 0 or v.bit_length() > self.nbits:
            raise OverflowFault('{} does not fit in {}'.format(str(x), type(self).__name__))
        self._v = v

    @classmethod
    def _wrap(cls, v, where):
        if v < 0:
            raise OverflowFault('underflow in {}.{}: result is negative'
                                .format(cls.__name__, where))
        if v.bit_length() > cls.nbits:
            raise OverflowFault('overflow in {}.{}: result exceeds {} bits'
                                .format(cls.__name__, where, cls.nbits))
        result = cls.__new__(cls)
        result._v = v
        return result

    @staticmethod
    def _operand(x):
        if isinstance(x, WideUInt):
            return x._v
        else:
            return gmp.mpz(x)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, int(self._v))

    def __str__(self):
        return str(int(self._v))

    def __int__(self):
        return int(self._v)

    def __index__(self):
        return int(self._v)

    def __hash__(self):
        return hash(int(self._v))

    # comparison is ordinary integer comparison, against ints or other widths

    def __eq__(self, other):
        if isinstance(other, (WideUInt, int)):
            return self._v == self._operand(other)
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, (WideUInt, int)):
            return self._v != self._operand(other)
        return NotImplemented

    def __lt__(self, other):
        return self._v < self._operand(other)

    def __le__(self, other):
        return self._v <= self._operand(other)

    def __gt__(self, other):
        return self._v > self._operand(other)

    def __ge__(self, other):
        return self._v >= self._operand(other)

    # bits

    def bit_length(self):
        return self._v.bit_length()

    def leading_zeros(self):
        return self.nbits - self._v.bit_length()

    def is_zero(self):
        return self._v == 0

    # checked arithmetic

    def checked_add(self, other):
        return self._wrap(self._v + self._operand(other), 'checked_add')

    def checked_sub(self, other):
        return self._wrap(self._v - self._operand(other), 'checked_sub')

    def checked_mul(self, other):
        return self._wrap(self._v * self._operand(other), 'checked_mul')

    def checked_div(self, other):
        d = self._operand(other)
        if d == 0:
            raise DivisionByZeroFault('division by zero in {}.checked_div: {} / 0'
                                      .format(type(self).__name__, str(self)))
        return self._wrap(gmp.f_div(self._v, d), 'checked_div')

    def checked_pow(self, exp):
        exp = int(exp)
        if exp < 0:
            raise OverflowFault('negative exponent {} in {}.checked_pow'
                                .format(exp, type(self).__name__))
        # 2**((bits - 1) * exp) <= v**exp, so this bound rules out huge intermediates
        if self._v > 1 and (self._v.bit_length() - 1) * exp >= self.nbits:
            raise OverflowFault('overflow in {}.checked_pow: {}**{} exceeds {} bits'
                                .format(type(self).__name__, str(self), exp, self.nbits))
        return self._wrap(self._v ** exp, 'checked_pow')

    def shr(self, n):
        return self._wrap(self._v >> int(n), 'shr')

    # conversion back to native width

    def narrow(self, nbits=integral.U128_BITS):
        """Convert to a Python int of at most nbits bits, or fault."""
        if self._v.bit_length() > nbits:
            raise NarrowingFault('{} value {} does not fit in {} bits'
                                 .format(type(self).__name__, str(self), nbits))
        return int(self._v)


class U192(WideUInt):
    nbits = 192


class U256(WideUInt):
    nbits = 256
