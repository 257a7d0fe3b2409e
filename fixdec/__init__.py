from .core import utils, ops, integral, wide, tables
from .arithmetic import evalctx, decimal

Decimal = decimal.Decimal
DecimalCtx = evalctx.DecimalCtx
default_ctx = evalctx.default_ctx

RM = ops.RM
LN = ops.LN

U192 = wide.U192
U256 = wide.U256

COMPUTE_SCALE = tables.COMPUTE_SCALE

DecimalError = utils.DecimalError
DecimalFault = utils.DecimalFault
