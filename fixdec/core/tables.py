"""Read-only constants for the logarithm kernels.

All constants are magnitudes at COMPUTE_SCALE, i.e. the real value
times 10**12, truncated.
"""

import numpy as np


# Internal scale used for high precision compute operations
COMPUTE_SCALE = 12
COMPUTE_DENOMINATOR = 10 ** COMPUTE_SCALE

# log2(e) = 1.4426950408889634073599246810018921374266459541529859341354494069...
LOG2_E = 1442695040888

# log2(10) = 3.3219280948873623478703194294893901758648313930245806120547563958...
LOG2_10 = 3321928094887

# ln(2) = 0.6931471805599453094172321214581765680755001343602552541206800094...
LN_2 = 693147180559

# ln(10) = 2.3025850929940456840179914546843642076011014886287729760333279009...
LN_10 = 2302585092994

# Exact magnitudes 10**-12 .. 10**12 at COMPUTE_SCALE, mapped to their
# (signed) decimal exponent.
POWERS_OF_TEN = {10 ** k: k - COMPUTE_SCALE for k in range(2 * COMPUTE_SCALE + 1)}


# INT(LN(1 + d * 10**-k) * 10**12) for digit d = row + 1 and place k = col + 1:
#   1.1  1.01  1.001  ...  1.000000000001
#   1.2  1.02  1.002  ...  1.000000000002
#   ...
#   1.9  1.09  1.009  ...  1.000000000009
LN_TABLE_ROWS = 9
LN_TABLE_COLS = 12
LN_TABLE = np.array([
    [ 95310179804,  9950330853,  999500333,  99995000,  9999950,  999999,  99999,  9999, 1000, 100, 10, 1],
    [182321556793, 19802627296, 1998002662, 199980002, 19999800, 1999998, 199999, 19999, 1999, 200, 20, 1],
    [262364264467, 29558802241, 2995508979, 299955008, 29999550, 2999995, 299999, 29999, 3000, 300, 30, 3],
    [336472236621, 39220713153, 3992021269, 399920021, 39999200, 3999991, 399999, 39999, 4000, 400, 40, 3],
    [405465108108, 48790164169, 4987541511, 499875041, 49998750, 4999987, 499999, 49999, 4999, 500, 50, 5],
    [470003629245, 58268908123, 5982071677, 599820071, 59998200, 5999982, 599999, 59999, 6000, 600, 60, 6],
    [530628251062, 67658648473, 6975613736, 699755114, 69997550, 6999975, 699999, 69999, 6999, 700, 70, 6],
    [587786664902, 76961041136, 7968169649, 799680170, 79996800, 7999968, 799999, 79999, 7999, 800, 80, 8],
    [641853886172, 86177696241, 8959741371, 899595242, 89995950, 8999959, 899999, 89999, 9000, 900, 90, 8],
], dtype=np.uint64)
LN_TABLE.setflags(write=False)


def ln_table_value(row: int, col: int) -> int:
    """ln(1 + (row + 1) * 10**-(col + 1)) at COMPUTE_SCALE, or 0 outside the table."""
    if 0 <= row < LN_TABLE_ROWS and 0 <= col < LN_TABLE_COLS:
        return int(LN_TABLE[row, col])
    else:
        return 0
