import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

_TWO_DP = Decimal("0.01")

# Nudge applied before quantizing so binary artefacts such as
# 1.005 -> 1.00499999999999989 still round up. Far below a cent.
ROUNDING_BIAS = 1e-9

# enough digits for any finite float's integer part plus two decimals
_PRECISION = 400


def round_money(amount: float) -> float:
    """Round to 2 dp, half away from zero, after bias correction.

    Idempotent: ``round_money(round_money(x)) == round_money(x)``.
    """
    corrected = amount + math.copysign(ROUNDING_BIAS, amount)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        rounded = Decimal(repr(corrected)).quantize(_TWO_DP, rounding=ROUND_HALF_UP)
    return float(rounded)
