"""
Capital Service
===============
Owns the capital plan: the single CapitalState row, its month-by-month
compound growth schedule (MonthlyCapital rows) and the pointer to the month
currently being played.

Schedule model
--------------
Each MonthlyCapital row stores (month, year) → (initial, current, target).

  initial_capital - capital the month started with
  current_capital - initial plus the profit of every settled bet stamped to it
  target_capital  - round_half_up(initial × (1 + monthly_growth_target))

Under default progression a month's initial capital is the previous month's
target.  Editing one month re-chains every later month from it.  Changing the
initial capital, growth rate or timeline regenerates the whole schedule and
discards manual month edits.

Primary entry points
--------------------
  get_or_initialize()     - fetch the plan, creating it with defaults if needed
  edit_capital()          - change initial/current capital or growth rate
  edit_monthly_capital()  - override one month and cascade forward
  update_schedule()       - new start month/year and duration (destructive)
  advance_month() / revert_month() - move the current month pointer
  reset()                 - re-project from the stored start parameters
  apply_profit_delta()    - bet cascade hook (no commit)
  apply_growth_rate()     - settings hook, keeps recorded month capital
"""
from flask import current_app

from extensions import db
from models.capital import CapitalState, MonthlyCapital
from models.settings import Settings
from services.exceptions import NotFound, InvalidInput, AtBoundary
from services.growth_service import calculate_compound_growth, next_target
from utils.db_helpers import unit_of_work
from utils.money import to_decimal
from utils.periods import Period, calculate_progress


class CapitalService:
    """
    Capital plan state and schedule maintenance.

    Mutating methods commit through unit_of_work(); the two cascade hooks
    (apply_profit_delta, apply_growth_rate) only modify the session so that
    the caller's transaction covers them.
    """

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @staticmethod
    def get_capital():
        """Return the CapitalState row or None."""
        return CapitalState.query.order_by(CapitalState.id.asc()).first()

    @staticmethod
    def require_capital():
        capital = CapitalService.get_capital()
        if capital is None:
            raise NotFound('Capital data not found')
        return capital

    @staticmethod
    def get_or_initialize():
        """
        Return the capital plan, creating it on first access.

        Defaults come from the app config: DEFAULT_INITIAL_CAPITAL (5000),
        DEFAULT_GROWTH_TARGET (20%), DEFAULT_START_MONTH/YEAR (April 2025) and
        a DEFAULT_SCHEDULE_MONTHS (36) month schedule.  Calling it again
        returns the same row untouched.
        """
        capital = CapitalService.get_capital()
        if capital is not None:
            return capital

        cfg = current_app.config
        initial_capital = to_decimal(cfg['DEFAULT_INITIAL_CAPITAL'])
        growth_target = to_decimal(cfg['DEFAULT_GROWTH_TARGET'])
        start_month = cfg['DEFAULT_START_MONTH']
        start_year = cfg['DEFAULT_START_YEAR']

        with unit_of_work('initialize capital data'):
            capital = CapitalState(
                initial_capital=initial_capital,
                current_capital=initial_capital,
                monthly_growth_target=growth_target,
                start_month=start_month,
                start_year=start_year,
                current_month=start_month,
                current_year=start_year,
            )
            capital.monthly_capital = CapitalService.build_schedule(
                initial_capital, growth_target, cfg['DEFAULT_SCHEDULE_MONTHS'],
                start_month, start_year,
            )
            db.session.add(capital)

        current_app.logger.info(
            f'Initialized capital plan: {initial_capital} at {growth_target * 100}% '
            f'from {capital.start_period.label}'
        )
        return capital

    @staticmethod
    def current_period():
        """The month bets are currently being recorded against."""
        return CapitalService.require_capital().current_period

    @staticmethod
    def get_month_entry(period, capital=None):
        capital = capital or CapitalService.require_capital()
        _, entry = capital.find_month(period.month, period.year)
        return entry

    @staticmethod
    def schedule_length(capital):
        return len(capital.monthly_capital) or current_app.config['DEFAULT_SCHEDULE_MONTHS']

    # ------------------------------------------------------------------
    # Schedule construction
    # ------------------------------------------------------------------

    @staticmethod
    def build_schedule(initial_capital, rate, months, start_month, start_year, preserve_current=None):
        """
        Project ``months`` MonthlyCapital rows.

        preserve_current maps (month, year) to a current_capital that should be
        kept instead of the projected starting capital.
        """
        preserve_current = preserve_current or {}
        entries = []
        for row in calculate_compound_growth(initial_capital, rate, months, start_month, start_year):
            entries.append(MonthlyCapital(
                month=row.month,
                year=row.year,
                initial_capital=row.capital,
                current_capital=preserve_current.get((row.month, row.year), row.capital),
                target_capital=row.target,
            ))
        return entries

    @staticmethod
    def _replace_schedule(capital, entries):
        # Old rows must be gone before the new ones hit the (month, year) unique constraint
        capital.monthly_capital.clear()
        db.session.flush()
        capital.monthly_capital.extend(entries)

    @staticmethod
    def _regenerate(capital, months=None, preserve_current=None):
        months = months or CapitalService.schedule_length(capital)
        entries = CapitalService.build_schedule(
            capital.initial_capital,
            capital.monthly_growth_target,
            months,
            capital.start_month,
            capital.start_year,
            preserve_current=preserve_current,
        )
        CapitalService._replace_schedule(capital, entries)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_rate(rate):
        rate = to_decimal(rate)
        if rate <= 0 or rate > 1:
            raise InvalidInput('Monthly growth target must be greater than 0% and at most 100%')
        return rate

    @staticmethod
    def _validate_amount(amount, label):
        amount = to_decimal(amount)
        if amount <= 0:
            raise InvalidInput(f'{label} must be greater than zero')
        return amount

    @staticmethod
    def _validate_month(month):
        if month is None or not 0 <= int(month) <= 11:
            raise InvalidInput('Month must be between 0 (January) and 11 (December)')
        return int(month)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    @staticmethod
    def edit_capital(initial_capital=None, current_capital=None, monthly_growth_target=None):
        """
        Apply the provided fields to the plan.

        If initial_capital or monthly_growth_target differs from the stored
        value the schedule is regenerated from the (unchanged) start month,
        discarding any manual month edits.  The schedule keeps its current
        length.  A new growth rate is also written to the settings row.
        """
        capital = CapitalService.require_capital()
        if initial_capital is not None:
            initial_capital = CapitalService._validate_amount(initial_capital, 'Initial capital')
        if monthly_growth_target is not None:
            monthly_growth_target = CapitalService._validate_rate(monthly_growth_target)

        initial_changed = initial_capital is not None and initial_capital != to_decimal(capital.initial_capital)
        rate_changed = (monthly_growth_target is not None
                        and monthly_growth_target != to_decimal(capital.monthly_growth_target))

        with unit_of_work('update capital data'):
            if initial_changed:
                capital.initial_capital = initial_capital

            if current_capital is not None:
                capital.current_capital = to_decimal(current_capital)

            if rate_changed:
                capital.monthly_growth_target = monthly_growth_target
                Settings.set_value('monthly_growth_target', monthly_growth_target, setting_type='float')

            if initial_changed or rate_changed:
                CapitalService._regenerate(capital)
                current_app.logger.info(
                    f'Capital schedule regenerated: initial={capital.initial_capital} '
                    f'rate={capital.monthly_growth_target}'
                )

        return capital

    @staticmethod
    def edit_monthly_capital(month, year, initial_capital):
        """
        Override the starting capital of one month and re-chain later months.

        The edited month gets initial = current = initial_capital and a fresh
        target; every following month starts at its predecessor's target.
        """
        capital = CapitalService.require_capital()
        initial_capital = CapitalService._validate_amount(initial_capital, 'Initial capital')
        rate = capital.monthly_growth_target

        index, entry = capital.find_month(month, year)
        if entry is None:
            raise NotFound('Monthly capital entry not found')

        with unit_of_work('update monthly capital'):
            entry.initial_capital = initial_capital
            entry.current_capital = initial_capital
            entry.target_capital = next_target(initial_capital, rate)

            schedule = capital.monthly_capital
            for i in range(index + 1, len(schedule)):
                previous_target = schedule[i - 1].target_capital
                schedule[i].initial_capital = previous_target
                schedule[i].current_capital = previous_target
                schedule[i].target_capital = next_target(previous_target, rate)

            if capital.current_period == Period(month, year):
                capital.current_capital = initial_capital

        current_app.logger.info(
            f'Monthly capital for {Period(month, year).label} set to {initial_capital}; '
            f'{len(capital.monthly_capital) - index - 1} later months re-chained'
        )
        return capital

    @staticmethod
    def update_schedule(start_month, start_year, duration_months):
        """
        Rebuild the schedule from a new start month/year and duration.

        Destroys all recorded progress and month edits: the pointer returns to
        the new start and current capital to the first month's initial capital.
        """
        capital = CapitalService.require_capital()
        start_month = CapitalService._validate_month(start_month)
        if duration_months is None or int(duration_months) < 1:
            raise InvalidInput('Duration must be at least one month')

        with unit_of_work('update capital settings'):
            capital.start_month = start_month
            capital.start_year = int(start_year)
            CapitalService._regenerate(capital, months=int(duration_months))

            capital.current_month = capital.start_month
            capital.current_year = capital.start_year
            if capital.monthly_capital:
                capital.current_capital = capital.monthly_capital[0].initial_capital
            else:
                capital.current_capital = capital.initial_capital

        current_app.logger.info(
            f'Capital timeline reset to {capital.start_period.label} for {duration_months} months'
        )
        return capital

    # ------------------------------------------------------------------
    # Current month pointer
    # ------------------------------------------------------------------

    @staticmethod
    def advance_month():
        """Move to the next month; current capital becomes that month's current capital."""
        capital = CapitalService.require_capital()
        target = capital.current_period.next()

        _, entry = capital.find_month(target.month, target.year)
        if entry is None:
            raise NotFound('Next month capital entry not found')

        with unit_of_work('advance to next month'):
            capital.current_month, capital.current_year = target
            capital.current_capital = entry.current_capital

        current_app.logger.info(f'Advanced capital plan to {target.label}')
        return capital

    @staticmethod
    def revert_month():
        """Move back one month; current capital becomes that month's current capital."""
        capital = CapitalService.require_capital()
        if capital.current_period == capital.start_period:
            raise AtBoundary('Already at the first month')

        target = capital.current_period.previous()
        _, entry = capital.find_month(target.month, target.year)
        if entry is None:
            raise NotFound('Previous month capital entry not found')

        with unit_of_work('go to previous month'):
            capital.current_month, capital.current_year = target
            capital.current_capital = entry.current_capital

        current_app.logger.info(f'Reverted capital plan to {target.label}')
        return capital

    @staticmethod
    def reset():
        """
        Re-project the schedule from the stored initial capital, start month and
        growth rate, keeping its length, and return the pointer to the start.

        Confirmation is the caller's job; this performs the reset unconditionally.
        """
        capital = CapitalService.require_capital()

        with unit_of_work('reset capital data'):
            CapitalService._regenerate(capital)
            capital.current_month = capital.start_month
            capital.current_year = capital.start_year
            capital.current_capital = capital.initial_capital

        current_app.logger.warning(f'Capital plan reset to {capital.start_period.label}')
        return capital

    # ------------------------------------------------------------------
    # Cascade hooks (no commit)
    # ------------------------------------------------------------------

    @staticmethod
    def apply_profit_delta(period, delta, capital=None):
        """
        Add ``delta`` to the month entry for ``period`` and, when ``period`` is
        the current month, to the plan's current capital.

        Used by the bet cascades; the caller commits.
        """
        capital = capital or CapitalService.require_capital()
        delta = to_decimal(delta)
        if not delta:
            return capital

        if capital.current_period == period:
            capital.current_capital = to_decimal(capital.current_capital) + delta

        _, entry = capital.find_month(period.month, period.year)
        if entry is None:
            current_app.logger.warning(
                f'No monthly capital entry for {period.label}; profit delta {delta} not recorded on the schedule'
            )
        else:
            entry.current_capital = to_decimal(entry.current_capital) + delta

        return capital

    @staticmethod
    def apply_growth_rate(rate, capital=None):
        """
        Regenerate the schedule for a new growth rate, keeping each month's
        recorded current capital where the month already existed.

        Settings hook; the caller commits.  Returns None if no plan exists yet.
        """
        capital = capital or CapitalService.get_capital()
        if capital is None:
            return None

        capital.monthly_growth_target = CapitalService._validate_rate(rate)
        recorded = {(entry.month, entry.year): entry.current_capital for entry in capital.monthly_capital}
        CapitalService._regenerate(capital, preserve_current=recorded)

        current_app.logger.info(f'Capital schedule re-projected for growth rate {capital.monthly_growth_target}')
        return capital

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    @staticmethod
    def projection_table(capital=None):
        """Schedule rows for the compound growth table."""
        capital = capital or CapitalService.get_or_initialize()
        rows = []
        for ordinal, entry in enumerate(capital.monthly_capital, start=1):
            row = entry.to_dict()
            row.update({
                'ordinal': ordinal,
                'growth': row['target_capital'] - row['initial_capital'],
                'progress': calculate_progress(
                    entry.current_capital - entry.initial_capital,
                    entry.target_capital - entry.initial_capital,
                ),
                'is_current': entry.period == capital.current_period,
            })
            rows.append(row)
        return rows
