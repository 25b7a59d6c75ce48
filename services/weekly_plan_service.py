"""
Weekly Plan Service
===================
Per-week betting targets for the current plan month and the running
bet counters that the bet cascades keep up to date.

Weekly stats
------------
For the month's capital baseline (initial, target) and a plan
(target_bets, average_odds, unit_size):

  target_profit          = round((target − initial) / 4)
  stake_amount           = round(initial × unit_size)
  potential_win_per_bet  = round(stake_amount × (average_odds − 1))
  current_profit         = Σ profit of the week's bets
  wins_needed            = max(0, ceil((target_profit − current_profit) / potential_win_per_bet))
  remaining_bets         = max(0, target_bets − bets_placed)

A plan whose stake or odds give no winnings per bet cannot say how many wins
are needed; wins_needed is reported as 0 and flagged.
"""
from datetime import date

from flask import current_app
from sqlalchemy import func

from extensions import db
from models.bets import Bet
from models.weekly_plans import WeeklyPlan
from services.capital_service import CapitalService
from services.exceptions import InvalidInput
from utils.db_helpers import unit_of_work
from utils.money import as_number, ceil_whole, round_currency, to_decimal
from utils.periods import week_of_month


class WeeklyPlanService:
    """Weekly plan storage, counters and derived weekly statistics."""

    @staticmethod
    def find_plan(period, week):
        return WeeklyPlan.query.filter_by(month=period.month, year=period.year, week=week).first()

    @staticmethod
    def default_plan(period, week):
        """Unsaved plan with the configured defaults and zero counters."""
        from services.settings_service import SettingsService

        cfg = current_app.config
        return WeeklyPlan(
            month=period.month,
            year=period.year,
            week=week,
            target_bets=cfg['DEFAULT_TARGET_BETS'],
            average_odds=to_decimal(cfg['DEFAULT_AVERAGE_ODDS']),
            unit_size=SettingsService.default_unit_size(),
            bets_placed=0,
            bets_won=0,
            bets_lost=0,
            bets_pending=0,
        )

    @staticmethod
    def get_or_default(week=None, today=None):
        """
        Plan and stats for a week of the current plan month.

        Args:
            week:  week of month; defaults to the week containing ``today``.
            today: date used to resolve the current week (defaults to date.today()).

        Returns:
            dict with 'weekly_plan', 'monthly_capital' and 'weekly_stats'.
            The plan is a transient default (persisted=False) when none was saved.
        """
        capital = CapitalService.require_capital()
        period = capital.current_period
        week = week or week_of_month(today or date.today())

        plan = WeeklyPlanService.find_plan(period, week)
        persisted = plan is not None
        if plan is None:
            plan = WeeklyPlanService.default_plan(period, week)

        entry = capital.find_month(period.month, period.year)[1]
        if entry is not None:
            initial = to_decimal(entry.initial_capital)
            current = to_decimal(entry.current_capital)
            target = to_decimal(entry.target_capital)
        else:
            initial = to_decimal(capital.initial_capital)
            current = to_decimal(capital.current_capital)
            target = round_currency(initial * (1 + to_decimal(capital.monthly_growth_target)))

        current_profit = WeeklyPlanService.week_profit(period, week)
        stats = WeeklyPlanService.calculate_weekly_stats(initial, target, plan, current_profit)

        return {
            'weekly_plan': plan.to_dict(persisted=persisted),
            'monthly_capital': {
                'initial_capital': as_number(initial),
                'current_capital': as_number(current),
                'target_capital': as_number(target),
            },
            'weekly_stats': stats,
        }

    @staticmethod
    def week_profit(period, week):
        total = db.session.query(func.coalesce(func.sum(Bet.profit), 0)).filter(
            Bet.month == period.month,
            Bet.year == period.year,
            Bet.week == week,
        ).scalar()
        return to_decimal(total)

    @staticmethod
    def calculate_weekly_stats(initial, target, plan, current_profit):
        weeks = current_app.config['WEEKS_PER_MONTH']
        target_profit = round_currency((to_decimal(target) - to_decimal(initial)) / weeks)
        stake_amount = round_currency(to_decimal(initial) * to_decimal(plan.unit_size))
        potential_win = round_currency(stake_amount * (to_decimal(plan.average_odds) - 1))

        wins_needed_undefined = potential_win <= 0
        if wins_needed_undefined:
            current_app.logger.warning(
                f'Weekly plan {plan.year}-{plan.month + 1:02d} week {plan.week}: stake {stake_amount} '
                f'at odds {plan.average_odds} wins nothing per bet; wins needed reported as 0'
            )
            wins_needed = 0
        else:
            wins_needed = max(0, ceil_whole((target_profit - to_decimal(current_profit)) / potential_win))

        return {
            'target_profit': as_number(target_profit),
            'current_profit': as_number(current_profit),
            'stake_amount': as_number(stake_amount),
            'potential_win_per_bet': as_number(potential_win),
            'wins_needed': wins_needed,
            'wins_needed_undefined': wins_needed_undefined,
            'remaining_bets': max(0, plan.target_bets - plan.bets_placed),
        }

    @staticmethod
    def create_or_update(week, target_bets, average_odds, unit_size, today=None):
        """
        Save the plan for ``week`` of the current plan month.

        unit_size is a percentage (5 = 5%) and is stored as a ratio.  A new
        plan starts its counters from the bets already stamped to that week.
        """
        capital = CapitalService.require_capital()
        period = capital.current_period
        week = week or week_of_month(today or date.today())

        target_bets = int(target_bets)
        average_odds = to_decimal(average_odds)
        unit_size = to_decimal(unit_size)
        if target_bets < 1:
            raise InvalidInput('Target bets must be at least 1')
        if average_odds < 1:
            raise InvalidInput('Average odds must be at least 1.0')
        if unit_size <= 0 or unit_size > 100:
            raise InvalidInput('Unit size must be greater than 0% and at most 100%')

        with unit_of_work('save weekly plan'):
            plan = WeeklyPlanService.find_plan(period, week)
            if plan is None:
                plan = WeeklyPlan(month=period.month, year=period.year, week=week)
                WeeklyPlanService._seed_counters(plan, period, week)
                db.session.add(plan)

            plan.target_bets = target_bets
            plan.average_odds = average_odds
            plan.unit_size = unit_size / 100

        current_app.logger.info(f'Saved weekly plan {period.label} week {week}')
        return plan

    @staticmethod
    def _seed_counters(plan, period, week):
        counts = dict(
            db.session.query(Bet.result, func.count(Bet.id))
            .filter(Bet.month == period.month, Bet.year == period.year, Bet.week == week)
            .group_by(Bet.result)
            .all()
        )
        plan.bets_won = counts.get('Win', 0)
        plan.bets_lost = counts.get('Loss', 0)
        plan.bets_pending = counts.get('Pending', 0)
        plan.bets_placed = plan.bets_won + plan.bets_lost + plan.bets_pending

    @staticmethod
    def apply_bet_count_delta(period, week, placed=0, won=0, lost=0, pending=0):
        """
        Adjust the counters of the plan for (period, week).

        Weeks without a saved plan are not tracked: returns None.  Used by the
        bet cascades; the caller commits.
        """
        plan = WeeklyPlanService.find_plan(period, week)
        if plan is None:
            return None

        plan.bets_placed += placed
        plan.bets_won += won
        plan.bets_lost += lost
        plan.bets_pending += pending
        return plan

    @staticmethod
    def result_delta(result, amount):
        """Counter keyword for a bet result, e.g. result_delta('Win', 1) -> {'won': 1}."""
        key = {'Win': 'won', 'Loss': 'lost', 'Pending': 'pending'}[result]
        return {key: amount}

    @staticmethod
    def list_for_period(period):
        return WeeklyPlan.query.filter_by(month=period.month, year=period.year)\
            .order_by(WeeklyPlan.week.asc()).all()

    @staticmethod
    def list_for_current_month():
        return WeeklyPlanService.list_for_period(CapitalService.current_period())
