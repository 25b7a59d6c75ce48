"""
Statistics Service
==================
Read-only rollups over the bet ledger: overall performance, per-league and
per-bet-type breakdowns, the dashboard overview and the monthly summary.
Nothing here is stored; every call recomputes from the bets.
"""
from datetime import date

from services.bet_service import BetService
from services.capital_service import CapitalService
from services.weekly_plan_service import WeeklyPlanService
from utils.money import as_number, to_decimal
from utils.periods import calculate_progress, weeks_in_month


def _win_rate(wins, losses):
    settled = wins + losses
    if settled == 0:
        return 0
    return wins / settled * 100


def _month_progress(entry):
    if entry is None:
        return 0
    initial = to_decimal(entry.initial_capital)
    return calculate_progress(to_decimal(entry.current_capital) - initial, to_decimal(entry.target_capital) - initial)


def _breakdown(bets, key):
    groups = {}
    for bet in bets:
        group = groups.setdefault(getattr(bet, key), {'bets': 0, 'wins': 0, 'losses': 0, 'profit': to_decimal(0)})
        group['bets'] += 1
        group['wins'] += bet.result == 'Win'
        group['losses'] += bet.result == 'Loss'
        group['profit'] += to_decimal(bet.profit)

    for group in groups.values():
        group['profit'] = as_number(group['profit'])
        group['win_rate'] = _win_rate(group['wins'], group['losses'])
    return groups


class StatisticsService:

    @staticmethod
    def bet_stats(month=None, year=None, week=None, league=None):
        """
        Performance over the bets matching the filter.

        win_rate is wins / (wins + losses) × 100 and roi is
        total_profit / total_stake × 100, where total_stake only counts
        settled bets; both are 0 when there is nothing to divide by.
        """
        bets = BetService.filtered_query(month=month, year=year, week=week, league=league).all()
        settled = [bet for bet in bets if bet.is_settled]

        wins = sum(1 for bet in bets if bet.result == 'Win')
        losses = sum(1 for bet in bets if bet.result == 'Loss')
        total_profit = sum((to_decimal(bet.profit) for bet in bets), to_decimal(0))
        total_stake = sum((to_decimal(bet.stake) for bet in settled), to_decimal(0))

        return {
            'total_bets': len(bets),
            'wins': wins,
            'losses': losses,
            'pending': len(bets) - len(settled),
            'total_profit': as_number(total_profit),
            'total_stake': as_number(total_stake),
            'win_rate': _win_rate(wins, losses),
            'roi': float(total_profit / total_stake * 100) if total_stake else 0,
            'average_odds': float(sum(to_decimal(bet.odds) for bet in settled) / len(settled)) if settled else 0,
            'league_stats': _breakdown(bets, 'league'),
            'bet_type_stats': _breakdown(bets, 'bet_type'),
        }

    @staticmethod
    def dashboard(today=None):
        """Capital overview, this week's plan progress and the latest bets."""
        capital = CapitalService.get_or_initialize()
        period = capital.current_period
        entry = CapitalService.get_month_entry(period, capital=capital)

        overview = {
            'period': {'month': period.month, 'year': period.year, 'label': period.label},
            'initial_capital': as_number(capital.initial_capital),
            'current_capital': as_number(capital.current_capital),
            'monthly_growth_target': float(capital.monthly_growth_target),
        }
        if entry is not None:
            overview.update({
                'month_initial_capital': as_number(entry.initial_capital),
                'month_target_capital': as_number(entry.target_capital),
                'month_progress': _month_progress(entry),
            })

        return {
            'capital': overview,
            'weekly': WeeklyPlanService.get_or_default(today=today or date.today()),
            'month_stats': StatisticsService.bet_stats(month=period.month, year=period.year),
            'recent_bets': [bet.to_dict() for bet in BetService.recent()],
        }

    @staticmethod
    def monthly_summary(period=None):
        """Capital, bet stats and week-by-week plan breakdown for one month."""
        capital = CapitalService.get_or_initialize()
        period = period or capital.current_period
        entry = CapitalService.get_month_entry(period, capital=capital)

        weeks = []
        for plan in WeeklyPlanService.list_for_period(period):
            row = plan.to_dict()
            row['win_rate'] = _win_rate(plan.bets_won, plan.bets_lost)
            row['profit'] = as_number(WeeklyPlanService.week_profit(period, plan.week))
            weeks.append(row)

        return {
            'period': {'month': period.month, 'year': period.year, 'label': period.label},
            'weeks_in_month': weeks_in_month(period.month, period.year),
            'monthly_capital': entry.to_dict() if entry is not None else None,
            'progress': _month_progress(entry),
            'stats': StatisticsService.bet_stats(month=period.month, year=period.year),
            'weekly_plans': weeks,
        }
