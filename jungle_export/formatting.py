"""
Locale independent fixed-point formatting of measurement values.

Values are rounded half up from their shortest decimal representation,
so 2.675 becomes "2.68" rather than following the binary value down.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .errors import DataError

MEASUREMENT_DIGITS = 2
STDDEV_DIGITS = 4


def format_decimal(value, digits):
    """Format ``value`` with exactly ``digits`` fractional digits and a '.' separator."""
    value = float(value)
    if not math.isfinite(value):
        raise DataError(f"Cannot export non-finite value {value!r}")
    with localcontext() as ctx:
        ctx.prec = 400
        rounded = Decimal(repr(value)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def format_measurement(value):
    return format_decimal(value, MEASUREMENT_DIGITS)


def format_stddev(value):
    return format_decimal(value, STDDEV_DIGITS)


def format_minutes(value):
    # whole minutes, as in elapsedTime and experimentDuration
    return format_decimal(value, 0)
