"""Integer square root by Babylonian (Newton) iteration over U192."""

import logging

from . import integral
from .wide import U192
from .utils import OverflowFault, ExceedsPrecisionRangeError

logger = logging.getLogger(__name__)

# stop once successive guesses are this close, in units of the scaled value
THRESHOLD = 1


def sqrt_scaled(value: int, scale: int) -> int:
    """Square root of the fixed-point magnitude value / 10**scale,
    returned as a magnitude at the same scale.

    sqrt(v / d) * d == sqrt(v * d), so the magnitude is multiplied by its
    own denominator (doubling the number of decimal places) before taking
    the integer root. That product may not fit in 192 bits, in which case
    ExceedsPrecisionRangeError is raised.
    """
    denominator = integral.checked_pow10(scale, where='sqrt')

    try:
        value_scaled = U192(value).checked_mul(denominator)
    except OverflowFault as exn:
        raise ExceedsPrecisionRangeError('sqrt: {} at scale {} exceeds the precision range of {}'
                                         .format(value, scale, U192.__name__)) from exn

    # seed with 2**(bits / 2), which is within a factor of 2 of the root
    bit_length = U192.nbits - value_scaled.leading_zeros()
    approx = U192(2).checked_pow(bit_length // 2)

    y = value_scaled.checked_div(approx)
    y_0 = U192(0)
    steps = 0

    # iterate until the guess stops moving (or oscillates by one unit)
    while ((y > y_0 and y.checked_sub(y_0) > THRESHOLD)
           or (y < y_0 and y_0.checked_sub(y) > THRESHOLD)):
        tmp_y = value_scaled.checked_div(y)
        y_0 = y
        y = y.checked_add(tmp_y).shr(1)
        steps += 1

    logger.debug('sqrt of %d at scale %d converged in %d steps', value, scale, steps)
    return y.narrow()
