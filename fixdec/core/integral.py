"""Native-width integer utilities.

Decimal magnitudes are unsigned 128-bit integers. Python ints do not
overflow, so every operation on a magnitude goes through one of the
checked helpers here, which raise a fault instead of producing a value
outside the native width:
  checked_add, checked_sub, checked_mul, checked_div, checked_pow10
  narrow(x, nbits): convert to a narrower unsigned width, or fault

Also provides small utilities for integers:
  floorlog2(x): x.bit_length() - 1, 0 if x is 0
  leading_zeros(x, nbits): zero bits above the top set bit in an nbits word
"""

from .utils import OverflowFault, NarrowingFault, DivisionByZeroFault


U64_BITS = 64
U128_BITS = 128

U64_MAX = (1 << U64_BITS) - 1
U128_MAX = (1 << U128_BITS) - 1

# largest k such that 10**k fits in 128 bits
MAX_POW10 = 38


def floorlog2(x: int) -> int:
    return max(x.bit_length() - 1, 0)


def leading_zeros(x: int, nbits: int = U128_BITS) -> int:
    """Count the zero bits above the most significant set bit of x,
    viewed as an unsigned word of nbits bits.
    """
    return nbits - x.bit_length()


def fits(x: int, nbits: int = U128_BITS) -> bool:
    return 0 <= x and x.bit_length() <= nbits


def checked_add(a: int, b: int, where: str = 'add') -> int:
    result = a + b
    if result > U128_MAX:
        raise OverflowFault('overflow in {}: {} + {} exceeds {} bits'
                            .format(where, a, b, U128_BITS))
    return result


def checked_sub(a: int, b: int, where: str = 'sub') -> int:
    if b > a:
        raise OverflowFault('underflow in {}: {} - {} is negative'
                            .format(where, a, b))
    return a - b


def checked_mul(a: int, b: int, where: str = 'mul') -> int:
    result = a * b
    if result > U128_MAX:
        raise OverflowFault('overflow in {}: {} * {} exceeds {} bits'
                            .format(where, a, b, U128_BITS))
    return result


def checked_div(a: int, b: int, where: str = 'div') -> int:
    """Floor division of unsigned integers."""
    if b == 0:
        raise DivisionByZeroFault('division by zero in {}: {} / 0'
                                  .format(where, a))
    return a // b


def checked_pow10(exp: int, where: str = 'pow10') -> int:
    if exp < 0 or exp > MAX_POW10:
        raise OverflowFault('overflow in {}: 10**{} exceeds {} bits'
                            .format(where, exp, U128_BITS))
    return 10 ** exp


def narrow(x: int, nbits: int = U64_BITS, where: str = 'narrow') -> int:
    if not fits(x, nbits):
        raise NarrowingFault('{}: {} does not fit in {} bits'
                             .format(where, x, nbits))
    return x
