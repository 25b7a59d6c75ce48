"""
Calendar helpers for the capital plan.

Months are 0-indexed throughout the application (0 = January, 11 = December),
matching how the schedule is stored.  ``Period`` is the explicit "which month
are we in" value that is passed to every cascade instead of reading a global
pointer.
"""
import calendar
from collections import namedtuple
from datetime import date

from dateutil.relativedelta import relativedelta


MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]


def month_name(month_index):
    return MONTH_NAMES[month_index]


class Period(namedtuple('Period', ['month', 'year'])):
    """A calendar month in the plan: ``month`` is 0-indexed."""

    __slots__ = ()

    @classmethod
    def from_date(cls, day):
        return cls(day.month - 1, day.year)

    @property
    def first_day(self):
        return date(self.year, self.month + 1, 1)

    @property
    def month_name(self):
        return month_name(self.month)

    @property
    def label(self):
        return f'{self.month_name} {self.year}'

    def shift(self, months):
        return Period.from_date(self.first_day + relativedelta(months=months))

    def next(self):
        return self.shift(1)

    def previous(self):
        return self.shift(-1)


def week_of_month(day=None):
    """Monday-based week number of ``day`` within its month (1-based).

    The first (possibly partial) week runs from the 1st to the first Sunday;
    each following Monday starts a new week.
    """
    if day is None:
        day = date.today()
    first_weekday = day.replace(day=1).weekday()  # Monday = 0
    return (day.day - 1 + first_weekday) // 7 + 1


def weeks_in_month(month, year):
    """Number of Monday-based weeks touching the month (4 to 6)."""
    first_weekday, days_in_month = calendar.monthrange(year, month + 1)
    return (days_in_month - 1 + first_weekday) // 7 + 1


def calculate_progress(current, target):
    """Percentage of ``target`` reached, capped at 100 (0 when target is 0)."""
    if not target:
        return 0
    return min(round(float(current) / float(target) * 100), 100)
