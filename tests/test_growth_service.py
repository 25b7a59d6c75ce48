"""
Unit tests for the compound growth projection and the period helpers.
No database access.
"""
from datetime import date
from decimal import Decimal

from services.growth_service import calculate_compound_growth, next_target
from utils.money import as_number, round_currency
from utils.periods import Period, calculate_progress, week_of_month, weeks_in_month


# ---------------------------------------------------------------------------
# calculate_compound_growth
# ---------------------------------------------------------------------------

class TestCompoundGrowth:

    def test_three_month_scenario(self):
        rows = calculate_compound_growth(5000, 0.2, 3, 3, 2025)

        assert [(r.month, r.year) for r in rows] == [(3, 2025), (4, 2025), (5, 2025)]
        assert [r.capital for r in rows] == [Decimal('5000'), Decimal('6000'), Decimal('7200')]
        assert [r.target for r in rows] == [Decimal('6000'), Decimal('7200'), Decimal('8640')]
        assert [r.month_name for r in rows] == ['April', 'May', 'June']

    def test_each_month_starts_at_previous_target(self):
        rows = calculate_compound_growth(1234, 0.137, 24, 0, 2025)
        for previous, row in zip(rows, rows[1:]):
            assert row.capital == previous.target

    def test_ordinal_and_growth(self):
        rows = calculate_compound_growth(5000, 0.2, 2, 3, 2025)
        assert [r.ordinal for r in rows] == [1, 2]
        assert rows[0].growth == Decimal('1000')

    def test_year_rollover(self):
        rows = calculate_compound_growth(5000, 0.2, 3, 10, 2025)
        assert [(r.month, r.year) for r in rows] == [(10, 2025), (11, 2025), (0, 2026)]

    def test_rounds_half_up_every_step(self):
        # 1001 * 1.5 = 1501.5 -> 1502, 1502 * 1.5 = 2253
        rows = calculate_compound_growth(1001, 0.5, 2, 0, 2025)
        assert rows[0].target == Decimal('1502')
        assert rows[1].target == Decimal('2253')

    def test_length_matches_months(self):
        assert len(calculate_compound_growth(5000, 0.2, 36, 3, 2025)) == 36

    def test_next_target(self):
        assert next_target(6000, Decimal('0.2')) == Decimal('7200')


# ---------------------------------------------------------------------------
# Money helpers
# ---------------------------------------------------------------------------

class TestMoney:

    def test_round_currency_half_up(self):
        assert round_currency(Decimal('2.5')) == Decimal('3')
        assert round_currency(Decimal('-2.5')) == Decimal('-3')
        assert round_currency(0.1 + 0.2) == Decimal('0')

    def test_as_number(self):
        assert as_number(Decimal('5000.00')) == 5000
        assert isinstance(as_number(Decimal('5000.00')), int)
        assert as_number(Decimal('12.50')) == 12.5
        assert as_number(None) is None


# ---------------------------------------------------------------------------
# Period helpers
# ---------------------------------------------------------------------------

class TestPeriods:

    def test_label(self):
        assert Period(3, 2025).label == 'April 2025'

    def test_next_and_previous_wrap_years(self):
        assert Period(11, 2025).next() == Period(0, 2026)
        assert Period(0, 2026).previous() == Period(11, 2025)

    def test_from_date(self):
        assert Period.from_date(date(2025, 4, 9)) == Period(3, 2025)

    def test_week_of_month(self):
        # April 2025 starts on a Tuesday; Monday 7th starts week 2
        assert week_of_month(date(2025, 4, 1)) == 1
        assert week_of_month(date(2025, 4, 6)) == 1
        assert week_of_month(date(2025, 4, 7)) == 2
        assert week_of_month(date(2025, 4, 30)) == 5

    def test_week_of_month_month_starting_sunday(self):
        # June 2025 starts on a Sunday: the 1st is a week on its own
        assert week_of_month(date(2025, 6, 1)) == 1
        assert week_of_month(date(2025, 6, 2)) == 2

    def test_weeks_in_month(self):
        assert weeks_in_month(3, 2025) == 5
        assert weeks_in_month(5, 2025) == 6
        # February 2021 starts on a Monday and has 28 days
        assert weeks_in_month(1, 2021) == 4

    def test_calculate_progress(self):
        assert calculate_progress(500, 1000) == 50
        assert calculate_progress(1500, 1000) == 100
        assert calculate_progress(100, 0) == 0
