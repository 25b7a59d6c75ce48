"""
Money helpers.

All monetary arithmetic is done in ``Decimal``.  Capital projections, targets
and bet profits are rounded half-up to a whole currency unit at every step,
so a projection compounds on the rounded figure rather than full precision.
"""
from decimal import Decimal, ROUND_HALF_UP, ROUND_CEILING


WHOLE_UNIT = Decimal('1')


def to_decimal(value):
    """Convert ints, floats, strings and Decimals to Decimal without float noise."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(value):
    """Round half-up to the nearest whole currency unit."""
    return to_decimal(value).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)


def ceil_whole(value):
    return int(to_decimal(value).to_integral_value(rounding=ROUND_CEILING))


def as_number(value):
    """JSON-friendly representation: int for whole amounts, float otherwise."""
    if value is None:
        return None
    value = to_decimal(value)
    if value == value.to_integral_value():
        return int(value)
    return float(value)
