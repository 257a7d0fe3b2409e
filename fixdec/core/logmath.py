"""Integer-only logarithms of fixed-point magnitudes.

Every kernel here takes an unsigned magnitude x (the real value times
10**scale) and returns a pair (magnitude, negative) rather than a signed
number: the sign of a logarithm is just whether x is below one, and
keeping it out of the iteration means the kernels never do signed
arithmetic. Callers rebuild a signed Decimal from the pair.

The kernels work at compute scale. normalize() maps an operand at any
scale onto a compute-scale magnitude plus a power of ten, and shift()
adds that power back onto the kernel's result.

The cost of each kernel depends only on the scale, never on x.
"""

import logging

from . import integral
from . import tables
from .integral import checked_add, checked_sub, checked_mul, checked_div
from .utils import DomainFault

logger = logging.getLogger(__name__)


# ln_table multiplies its operand by the compute denominator, and only
# has an exact 2**-n for n <= 12
LN_TABLE_MIN_OPERAND = 10 ** 9
LN_TABLE_MAX_OPERAND = 10 ** 26


def _check_domain(x, fname):
    if x <= 0:
        raise DomainFault('{}: operand must be greater than zero, got {}'.format(fname, x))


def normalize(value: int, scale: int, low: int = 1, high: int = integral.U128_MAX):
    """Split value / 10**scale into a magnitude x at compute scale and a
    decimal exponent e, with value / 10**scale == x / 10**12 * 10**e.

    If the operand converts to compute scale exactly and lands in
    [low, high], that conversion is used unchanged and e is 0. Otherwise
    x is the operand's leading digits, brought into [1, 10) at compute
    scale; only digits past the 13th significant one are dropped.
    """
    _check_domain(value, 'normalize')

    places = tables.COMPUTE_SCALE - scale
    if places >= 0:
        x, rem = value * 10 ** places, 0
    else:
        x, rem = divmod(value, 10 ** -places)

    if rem == 0 and low <= x <= high:
        return x, 0

    # decimal exponent of the leading digit
    p = len(str(value)) - 1
    if p <= tables.COMPUTE_SCALE:
        x = value * 10 ** (tables.COMPUTE_SCALE - p)
    else:
        x = value // 10 ** (p - tables.COMPUTE_SCALE)

    logger.debug('normalized %d at scale %d to %d * 10**%d', value, scale, x, p - scale)
    return x, p - scale


def shift(magnitude: int, negative: bool, e: int, unit: int):
    """Add e * unit to the signed result (magnitude, negative), where unit
    is the logarithm of 10 in the kernel's base. Undoes normalize().
    """
    if e == 0:
        return magnitude, negative
    result = (-magnitude if negative else magnitude) + e * unit
    return abs(result), result < 0


def log2(x: int, scale: int = tables.COMPUTE_SCALE):
    """Binary logarithm of x / 10**scale, at the same scale.

    The integer part is the position of the most significant bit of the
    integer part of x. The fractional part is found one bit at a time by
    repeated squaring: after normalizing y into [1, 2), y**2 >= 2 means
    the next bit of the logarithm is set (and y is halved back into range).
    See https://en.wikipedia.org/wiki/Binary_logarithm#Iterative_approximation
    """
    _check_domain(x, 'log2')

    denominator = integral.checked_pow10(scale, where='log2')
    negative = x < denominator

    # log2(x) = -log2(1/x)
    if negative:
        x = checked_div(checked_mul(denominator, denominator, 'log2'), x, 'log2')

    n = integral.floorlog2(checked_div(x, denominator, 'log2'))
    result = checked_mul(n, denominator, 'log2')

    y = x >> n

    # exact power of two: no fractional part
    if y == denominator:
        return result, negative

    two = checked_mul(2, denominator, 'log2')
    z = denominator >> 1

    while z > 0:
        y = checked_div(checked_mul(y, y, 'log2'), denominator, 'log2')

        if y >= two:
            result = checked_add(result, z, 'log2')
            y >>= 1

        z >>= 1

    return result, negative


def log10(x: int):
    """Decimal logarithm of x / 10**12, at scale 12.

    Exact powers of ten are looked up directly; anything else is
    log2(x) / log2(10). The result is negative exactly when x < 1.
    """
    _check_domain(x, 'log10')

    denominator = tables.COMPUTE_DENOMINATOR
    negative = x < denominator

    if x == denominator:
        return 0, False

    tens = tables.POWERS_OF_TEN.get(x)
    if tens is not None:
        logger.debug('log10 of %d is the exact power 10**%d', x, tens)
        return checked_mul(abs(tens), denominator, 'log10'), negative

    log2_x, _ = log2(x)
    return checked_div(checked_mul(log2_x, denominator, 'log10'), tables.LOG2_10, 'log10'), negative


def ln(x: int):
    """Natural logarithm of x / 10**12, at scale 12, as log2(x) / log2(e)."""
    _check_domain(x, 'ln')

    log2_x, negative = log2(x)
    return checked_div(checked_mul(log2_x, tables.COMPUTE_DENOMINATOR, 'ln'), tables.LOG2_E, 'ln'), negative


def bit_length(x: int, scale: int = tables.COMPUTE_SCALE):
    """Integer binary exponent of x / 10**scale, estimated as
    log10(x) / log10(2).

    Returns (n, negative): for x >= 1, n = floor(log2(x)); for x < 1,
    n = ceil(-log2(x)) and negative is True. Either way x / 2**(+-n)
    lies in [1, 2).
    """
    if x == 0:
        return 0, False

    compute_denominator = tables.COMPUTE_DENOMINATOR
    denominator = 10 ** scale
    negative = x < denominator

    m, e = normalize(x, scale)
    log10_x, _ = shift(*log10(m), e, compute_denominator)
    log10_2, _ = log10(2 * compute_denominator)

    ratio = checked_div(checked_mul(log10_x, compute_denominator, 'bit_length'), log10_2, 'bit_length')

    if negative:
        n = checked_div(checked_add(ratio, compute_denominator - 1, 'bit_length'),
                        compute_denominator, 'bit_length')
    else:
        n = checked_div(ratio, compute_denominator, 'bit_length')

    # log10 truncates, so next to a power of two the estimate can be one off
    if negative:
        while (x << n) < denominator:
            n += 1
        while n > 1 and (x << (n - 1)) >= denominator:
            n -= 1
    else:
        while n > 0 and (denominator << n) > x:
            n -= 1
        while (denominator << (n + 1)) <= x:
            n += 1

    return n, negative


# number of decimal places of the residual matched against the table
LN_TABLE_DIGITS = 10

def _ln_table_digit(s, t, col):
    """Divide the residual s by the previous truncation t, then truncate the
    new residual to col + 1 decimal places and look up the contribution of
    its last digit.
    """
    denominator = tables.COMPUTE_DENOMINATOR
    place = 10 ** (col + 1)

    s = checked_div(checked_mul(s, denominator, 'ln_table'), t, 'ln_table')

    truncated = checked_div(checked_mul(s, place, 'ln_table'), denominator, 'ln_table')
    t = checked_div(checked_mul(truncated, denominator, 'ln_table'), place, 'ln_table')

    digit = checked_div(checked_mul(t, place, 'ln_table'), denominator, 'ln_table') - place

    # a residual below one contributes nothing
    if digit <= 0:
        lx = 0
    else:
        lx = tables.ln_table_value(digit - 1, col)

    return s, t, lx


def ln_table(x: int):
    """Natural logarithm of x / 10**12, at scale 12, by table lookup.

    Write x = 2**n * r with r in [1, 2). Then ln(x) = n * ln(2) + ln(r),
    and r is peeled apart digit by digit: r = (1 + d1/10) * (1 + d2/100) * ...
    so ln(r) is a sum of precomputed ln(1 + d * 10**-k). There is no
    convergence loop, at the cost of some accuracy in the last places.

    Accurate for x in [LN_TABLE_MIN_OPERAND, LN_TABLE_MAX_OPERAND]; use
    normalize() to bring other operands into that range.
    """
    _check_domain(x, 'ln_table')

    denominator = tables.COMPUTE_DENOMINATOR

    n, negative = bit_length(x)

    top = checked_mul(1 << n, denominator, 'ln_table')
    if negative:
        # x^-n = 1/x^n
        top = checked_div(checked_mul(denominator, denominator, 'ln_table'), top, 'ln_table')

    s, t = x, top
    lx_sum = 0
    for col in range(LN_TABLE_DIGITS):
        s, t, lx = _ln_table_digit(s, t, col)
        lx_sum = checked_add(lx_sum, lx, 'ln_table')

    logger.debug('ln_table of %d: 2**%s%d, residual sum %d',
                 x, '-' if negative else '', n, lx_sum)

    ln2_n = checked_div(checked_mul(tables.LN_2, checked_mul(n, denominator, 'ln_table'), 'ln_table'),
                        denominator, 'ln_table')

    if negative:
        return checked_sub(ln2_n, lx_sum, 'ln_table'), negative
    else:
        return checked_add(ln2_n, lx_sum, 'ln_table'), negative
