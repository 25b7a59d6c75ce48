"""
Bet Service
===========
Recording, editing and deleting bets, and keeping the capital plan and the
weekly plan counters consistent with them.

Cascade rules
-------------
Every bet is stamped with the plan's current (month, year) and the week of
month when it is created.  The stamp never changes, so every later cascade
targets the period the bet was placed in, even after the plan has advanced.

  create  - settled bets add their profit to that month's capital;
            bets_placed and the result counter go up by one
  update  - profit is recomputed when result, odds or stake change and the
            difference is applied to the bet's month; a result change moves
            one count from the old result counter to the new one
  delete  - settled bets take their profit back out; bets_placed and the
            result counter go down by one

Each operation runs as a single unit of work: the bet, the capital plan and
the weekly plan are committed together or not at all.
"""
from datetime import date

from flask import current_app

from extensions import db
from models.bets import Bet, BET_RESULTS, BET_TYPES
from services.capital_service import CapitalService
from services.exceptions import InvalidInput
from services.weekly_plan_service import WeeklyPlanService
from utils.db_helpers import get_or_raise, unit_of_work
from utils.money import to_decimal
from utils.periods import week_of_month


EDITABLE_FIELDS = ('match_name', 'league', 'date', 'odds', 'stake', 'bet_type', 'result', 'notes')
PROFIT_FIELDS = ('result', 'odds', 'stake')


class BetService:
    """Bet ledger with capital and weekly-plan cascades."""

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(fields):
        """Re-check the numeric and enum fields present in ``fields``."""
        if 'odds' in fields:
            fields['odds'] = to_decimal(fields['odds'])
            if fields['odds'] < 1:
                raise InvalidInput('Odds must be at least 1.0')
        if 'stake' in fields:
            fields['stake'] = to_decimal(fields['stake'])
            if fields['stake'] <= 0:
                raise InvalidInput('Stake must be greater than zero')
        if 'result' in fields and fields['result'] not in BET_RESULTS:
            raise InvalidInput(f'Result must be one of {", ".join(BET_RESULTS)}')
        if 'bet_type' in fields and fields['bet_type'] not in BET_TYPES:
            raise InvalidInput(f'Bet type must be one of {", ".join(BET_TYPES)}')
        for name in ('match_name', 'league'):
            if name in fields and not (fields[name] or '').strip():
                raise InvalidInput(f'{name.replace("_", " ").capitalize()} is required')
        return fields

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @staticmethod
    def create(data, today=None):
        """
        Record a new bet against the current plan month.

        Args:
            data:  dict with match_name, league, date, odds, stake, bet_type,
                   result (default 'Pending') and optional notes.
            today: date used for the week-of-month stamp (defaults to date.today()).

        Returns:
            The persisted Bet.
        """
        fields = {name: data[name] for name in EDITABLE_FIELDS if name in data}
        fields.setdefault('result', 'Pending')
        missing = [name for name in ('match_name', 'league', 'date', 'odds', 'stake', 'bet_type') if fields.get(name) is None]
        if missing:
            raise InvalidInput(f'Missing required fields: {", ".join(missing)}')
        BetService._validate(fields)

        capital = CapitalService.require_capital()
        period = capital.current_period
        week = week_of_month(today or date.today())
        profit = Bet.calculate_profit(fields['result'], fields['stake'], fields['odds'])

        with unit_of_work('create bet'):
            bet = Bet(month=period.month, year=period.year, week=week, profit=profit, **fields)
            db.session.add(bet)

            if bet.is_settled:
                CapitalService.apply_profit_delta(period, profit, capital=capital)

            WeeklyPlanService.apply_bet_count_delta(
                period, week, placed=1, **WeeklyPlanService.result_delta(bet.result, 1)
            )

        current_app.logger.info(f'Bet {bet.id} recorded for {period.label} week {week}: {bet.result} {profit}')
        return bet

    @staticmethod
    def update(bet_id, changes):
        """
        Apply ``changes`` (any of EDITABLE_FIELDS) to a bet.

        Profit is only recomputed when result, odds or stake are among the
        changes.  Capital and counter adjustments go to the bet's own stamped
        period, not the plan's current month.
        """
        bet = get_or_raise(Bet, bet_id, 'Bet not found')
        capital = CapitalService.require_capital()
        fields = BetService._validate({name: changes[name] for name in EDITABLE_FIELDS if name in changes})

        old_result = bet.result
        new_result = fields.get('result', old_result)
        old_profit = to_decimal(bet.profit)
        new_profit = old_profit
        if any(name in fields for name in PROFIT_FIELDS):
            new_profit = Bet.calculate_profit(
                new_result,
                fields.get('stake', bet.stake),
                fields.get('odds', bet.odds),
            )

        period = bet.period
        with unit_of_work('update bet'):
            if new_result != old_result:
                WeeklyPlanService.apply_bet_count_delta(
                    period, bet.week,
                    **WeeklyPlanService.result_delta(old_result, -1),
                    **WeeklyPlanService.result_delta(new_result, 1),
                )

            still_pending = old_result == 'Pending' and new_result == 'Pending'
            if new_profit != old_profit and not still_pending:
                CapitalService.apply_profit_delta(period, new_profit - old_profit, capital=capital)

            for name, value in fields.items():
                setattr(bet, name, value)
            bet.profit = new_profit

        current_app.logger.info(
            f'Bet {bet.id} updated: {old_result} {old_profit} -> {new_result} {new_profit}'
        )
        return bet

    @staticmethod
    def delete(bet_id):
        """Remove a bet and reverse its capital and counter contributions."""
        bet = get_or_raise(Bet, bet_id, 'Bet not found')
        capital = CapitalService.require_capital()
        period, week = bet.period, bet.week

        with unit_of_work('delete bet'):
            WeeklyPlanService.apply_bet_count_delta(
                period, week, placed=-1, **WeeklyPlanService.result_delta(bet.result, -1)
            )
            if bet.is_settled:
                CapitalService.apply_profit_delta(period, -to_decimal(bet.profit), capital=capital)
            db.session.delete(bet)

        current_app.logger.info(f'Bet {bet_id} deleted from {period.label} week {week}')

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @staticmethod
    def get(bet_id):
        return get_or_raise(Bet, bet_id, 'Bet not found')

    @staticmethod
    def filtered_query(month=None, year=None, week=None, result=None, league=None):
        query = Bet.query
        if month is not None:
            query = query.filter(Bet.month == month)
        if year is not None:
            query = query.filter(Bet.year == year)
        if week is not None:
            query = query.filter(Bet.week == week)
        if result:
            query = query.filter(Bet.result == result)
        if league:
            query = query.filter(Bet.league == league)
        return query

    @staticmethod
    def list_bets(month=None, year=None, week=None, result=None, league=None, limit=10, skip=0):
        """
        Bets newest first with pagination.

        Returns:
            dict with 'bets' (list[Bet]) and 'pagination'
            {'total', 'limit', 'skip', 'has_more'}.
        """
        limit = limit or 10
        skip = skip or 0
        query = BetService.filtered_query(month, year, week, result, league)
        total = query.count()
        bets = query.order_by(Bet.date.desc(), Bet.id.desc()).offset(skip).limit(limit).all()
        return {
            'bets': bets,
            'pagination': {
                'total': total,
                'limit': limit,
                'skip': skip,
                'has_more': total > skip + limit,
            },
        }

    @staticmethod
    def recent(limit=5):
        return Bet.query.order_by(Bet.date.desc(), Bet.id.desc()).limit(limit).all()
