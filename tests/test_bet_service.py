"""
Integration tests for BetService cascades.

Every bet mutation must keep three things in step: the bet row, the capital
plan (month entry and current capital) and the weekly plan counters.
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models.bets import Bet
from services.bet_service import BetService
from services.capital_service import CapitalService
from services.exceptions import CascadeFailure, InvalidInput, NotFound
from services.weekly_plan_service import WeeklyPlanService
from utils.periods import Period


TODAY = date(2025, 4, 9)  # week 2 of April 2025


@pytest.fixture
def plan(capital):
    return WeeklyPlanService.create_or_update(
        week=2, target_bets=5, average_odds=Decimal('1.8'), unit_size=5, today=TODAY
    )


def _april(capital):
    return capital.find_month(3, 2025)[1]


def _assert_counter_invariant(plan):
    assert plan.bets_placed == plan.bets_won + plan.bets_lost + plan.bets_pending


# ---------------------------------------------------------------------------
# Bet.calculate_profit
# ---------------------------------------------------------------------------

class TestCalculateProfit:

    def test_win(self):
        assert Bet.calculate_profit('Win', 250, Decimal('1.8')) == 200

    def test_win_rounds_half_up(self):
        # 15 * 0.5 = 7.5 -> 8
        assert Bet.calculate_profit('Win', 15, Decimal('1.5')) == 8

    def test_loss(self):
        assert Bet.calculate_profit('Loss', 250, Decimal('1.8')) == -250

    def test_pending(self):
        assert Bet.calculate_profit('Pending', 250, Decimal('1.8')) == 0


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

class TestCreate:

    def test_winning_bet_updates_capital_and_counters(self, capital, plan, make_bet):
        bet = make_bet(result='Win')

        assert bet.profit == 200
        assert (bet.month, bet.year, bet.week) == (3, 2025, 2)
        assert _april(capital).current_capital == 5200
        assert capital.current_capital == 5200
        assert plan.bets_placed == 1
        assert plan.bets_won == 1
        _assert_counter_invariant(plan)

    def test_pending_bet_leaves_capital(self, capital, plan, make_bet):
        bet = make_bet()

        assert bet.profit == 0
        assert capital.current_capital == 5000
        assert plan.bets_pending == 1
        _assert_counter_invariant(plan)

    def test_losing_bet(self, capital, plan, make_bet):
        make_bet(result='Loss', stake='100')

        assert capital.current_capital == 4900
        assert plan.bets_lost == 1

    def test_week_without_plan_is_not_tracked(self, capital, make_bet):
        bet = make_bet(result='Win')

        assert bet.week == 2
        assert WeeklyPlanService.find_plan(Period(3, 2025), 2) is None
        assert capital.current_capital == 5200

    def test_stamps_plan_month_not_bet_date(self, capital, make_bet):
        CapitalService.advance_month()
        bet = make_bet(today=date(2025, 4, 20))

        assert (bet.month, bet.year) == (4, 2025)
        assert bet.week == 3

    def test_requires_capital_plan(self, app):
        with pytest.raises(NotFound):
            BetService.create({
                'match_name': 'A vs B', 'league': 'L', 'date': TODAY,
                'odds': '2', 'stake': '10', 'bet_type': 'Win',
            }, today=TODAY)

    @pytest.mark.parametrize('overrides, message', [
        ({'odds': '0.5'}, 'Odds must be at least 1.0'),
        ({'stake': '0'}, 'Stake must be greater than zero'),
        ({'result': 'Void'}, 'Result must be one of'),
        ({'bet_type': 'Corners'}, 'Bet type must be one of'),
        ({'match_name': None}, 'Missing required fields: match_name'),
    ])
    def test_invalid_input_persists_nothing(self, capital, make_bet, overrides, message):
        with pytest.raises(InvalidInput, match=message):
            make_bet(**overrides)

        assert Bet.query.count() == 0
        assert capital.current_capital == 5000


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------

class TestUpdate:

    def test_win_to_loss(self, capital, plan, make_bet):
        bet = make_bet(result='Win')
        BetService.update(bet.id, {'result': 'Loss'})

        assert bet.profit == -250
        assert capital.current_capital == 4750
        assert _april(capital).current_capital == 4750
        assert (plan.bets_won, plan.bets_lost) == (0, 1)
        assert plan.bets_placed == 1
        _assert_counter_invariant(plan)

    def test_pending_to_win(self, capital, plan, make_bet):
        bet = make_bet()
        BetService.update(bet.id, {'result': 'Win'})

        assert bet.profit == 200
        assert capital.current_capital == 5200
        assert (plan.bets_pending, plan.bets_won) == (0, 1)

    def test_win_to_pending_takes_profit_back(self, capital, plan, make_bet):
        bet = make_bet(result='Win')
        BetService.update(bet.id, {'result': 'Pending'})

        assert bet.profit == 0
        assert capital.current_capital == 5000
        assert (plan.bets_won, plan.bets_pending) == (0, 1)

    def test_stake_change_on_settled_bet(self, capital, plan, make_bet):
        bet = make_bet(result='Win')
        BetService.update(bet.id, {'stake': '500'})

        assert bet.profit == 400
        assert capital.current_capital == 5400
        assert plan.bets_won == 1

    def test_pending_stake_change_leaves_capital(self, capital, plan, make_bet):
        bet = make_bet()
        BetService.update(bet.id, {'stake': '500', 'odds': '3'})

        assert bet.profit == 0
        assert capital.current_capital == 5000

    def test_notes_only_keeps_profit(self, capital, make_bet):
        bet = make_bet(result='Win')
        BetService.update(bet.id, {'notes': 'Late winner'})

        assert bet.notes == 'Late winner'
        assert bet.profit == 200
        assert capital.current_capital == 5200

    def test_cascade_targets_stamped_month(self, capital, make_bet):
        bet = make_bet(result='Win')
        CapitalService.advance_month()
        BetService.update(bet.id, {'result': 'Loss'})

        assert (bet.month, bet.year) == (3, 2025)
        assert _april(capital).current_capital == 4750
        assert capital.find_month(4, 2025)[1].current_capital == 6000
        assert capital.current_capital == 6000

    def test_missing_bet(self, capital):
        with pytest.raises(NotFound, match='Bet not found'):
            BetService.update(999, {'result': 'Win'})

    def test_invalid_change_rolls_back(self, capital, make_bet):
        bet = make_bet(result='Win')
        with pytest.raises(InvalidInput):
            BetService.update(bet.id, {'odds': '0.2'})

        assert bet.odds == Decimal('1.8')
        assert capital.current_capital == 5200


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------

class TestDelete:

    def test_pending_bet(self, capital, plan, make_bet):
        bet = make_bet()
        BetService.delete(bet.id)

        assert Bet.query.count() == 0
        assert (plan.bets_placed, plan.bets_pending) == (0, 0)
        assert capital.current_capital == 5000

    def test_winning_bet_reverses_profit(self, capital, plan, make_bet):
        bet = make_bet(result='Win')
        BetService.delete(bet.id)

        assert capital.current_capital == 5000
        assert _april(capital).current_capital == 5000
        assert (plan.bets_placed, plan.bets_won) == (0, 0)

    def test_missing_bet(self, capital):
        with pytest.raises(NotFound):
            BetService.delete(999)


# ---------------------------------------------------------------------------
# Invariants across mixed sequences
# ---------------------------------------------------------------------------

class TestConservation:

    def test_month_capital_tracks_settled_profit(self, capital, plan, make_bet):
        first = make_bet(result='Win')
        second = make_bet(result='Loss', stake='100')
        third = make_bet()
        BetService.update(third.id, {'result': 'Win', 'stake': '50', 'odds': '3'})
        BetService.update(first.id, {'odds': '2.2'})
        BetService.delete(second.id)
        make_bet(result='Loss', stake='75')

        april = _april(capital)
        settled = sum(b.profit for b in Bet.query.filter_by(month=3, year=2025) if b.is_settled)
        assert april.current_capital - april.initial_capital == settled
        assert capital.current_capital == april.current_capital
        assert plan.bets_placed == 3
        _assert_counter_invariant(plan)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

class TestListBets:

    def test_newest_first_with_pagination(self, capital, make_bet):
        for day in (3, 9, 6):
            make_bet(date=date(2025, 4, day), match_name=f'Match {day}')

        page = BetService.list_bets(limit=2)

        assert [b.match_name for b in page['bets']] == ['Match 9', 'Match 6']
        assert page['pagination'] == {'total': 3, 'limit': 2, 'skip': 0, 'has_more': True}

        last = BetService.list_bets(limit=2, skip=2)
        assert [b.match_name for b in last['bets']] == ['Match 3']
        assert last['pagination']['has_more'] is False

    def test_filters(self, capital, make_bet):
        make_bet(result='Win', league='Serie A')
        make_bet(result='Loss')

        assert BetService.list_bets(result='Win')['pagination']['total'] == 1
        assert BetService.list_bets(league='Serie A')['bets'][0].result == 'Win'
        assert BetService.list_bets(week=3)['pagination']['total'] == 0

    def test_get_missing(self, capital):
        with pytest.raises(NotFound):
            BetService.get(42)


# ---------------------------------------------------------------------------
# Rollback when a cascade step fails
# ---------------------------------------------------------------------------

class TestCascadeRollback:

    def test_database_error_rolls_back_create(self, capital, monkeypatch):
        def fail(*args, **kwargs):
            raise SQLAlchemyError('disk I/O error')

        monkeypatch.setattr(WeeklyPlanService, 'apply_bet_count_delta', fail)

        with pytest.raises(CascadeFailure, match='Failed to create bet'):
            BetService.create({
                'match_name': 'Arsenal vs Chelsea', 'league': 'Premier League', 'date': TODAY,
                'odds': '1.8', 'stake': '250', 'bet_type': 'Win', 'result': 'Win',
            }, today=TODAY)

        assert Bet.query.count() == 0
        assert capital.current_capital == 5000
        assert _april(capital).current_capital == 5000

    def test_unexpected_error_rolls_back_update(self, capital, plan, make_bet, monkeypatch):
        bet = make_bet(result='Win')

        def fail(*args, **kwargs):
            raise TypeError('bad delta')

        monkeypatch.setattr(CapitalService, 'apply_profit_delta', fail)

        with pytest.raises(TypeError):
            BetService.update(bet.id, {'result': 'Loss'})

        assert bet.result == 'Win'
        assert bet.profit == 200
        assert (plan.bets_won, plan.bets_lost) == (1, 0)
        assert capital.current_capital == 5200
