"""Operation codes shared by the decimal arithmetic."""

from enum import IntEnum, unique

class RM(IntEnum):
    """Rounding applied when a magnitude loses decimal places."""
    ROUND_TO_ZERO = 4
    RTZ = 4
    ROUND_AWAY_ZERO = 5
    RAZ = 5

@unique
class LN(IntEnum):
    """Strategies for the natural logarithm.
    ITERATIVE divides the iterative binary logarithm by log2(e).
    TABLE sums per-digit lookups of ln(1 + d * 10**-k), with no convergence loop.
    """
    ITERATIVE = 0
    TABLE = 1
