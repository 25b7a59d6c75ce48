"""
Compound Growth Service
=======================
Projects a capital plan month by month.

Month i of the plan starts with the capital the previous month was aiming
for, and aims for that capital grown by the monthly rate::

    target_i  = round_half_up(capital_i × (1 + rate))
    capital_i+1 = target_i

Rounding happens at every step, so a long projection compounds on whole
currency units rather than full precision.  Callers validate inputs
(``rate > -1``, ``months > 0``) before calling.
"""
from collections import namedtuple

from utils.money import round_currency, to_decimal
from utils.periods import month_name


MonthProjection = namedtuple(
    'MonthProjection',
    ['ordinal', 'month', 'year', 'month_name', 'capital', 'target', 'growth'],
)


def calculate_compound_growth(initial_capital, rate, months, start_month, start_year):
    """Return ``months`` MonthProjection rows starting at start_month/start_year.

    ``start_month`` is 0-indexed; ``ordinal`` is the 1-based plan month.
    """
    rate = to_decimal(rate)
    capital = to_decimal(initial_capital)
    projections = []

    for i in range(months):
        month = (start_month + i) % 12
        year = start_year + (start_month + i) // 12
        target = round_currency(capital * (1 + rate))

        projections.append(MonthProjection(
            ordinal=i + 1,
            month=month,
            year=year,
            month_name=month_name(month),
            capital=capital,
            target=target,
            growth=target - capital,
        ))

        capital = target

    return projections


def next_target(capital, rate):
    """Target capital for a month that starts with ``capital``."""
    return round_currency(to_decimal(capital) * (1 + to_decimal(rate)))
