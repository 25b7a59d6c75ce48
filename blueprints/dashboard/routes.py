from flask import request
from . import dashboard_bp
from services.statistics_service import StatisticsService
from utils.periods import Period
from utils.responses import success, failure


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
def index():
    """Capital overview, this week's plan and recent bets"""
    return success(StatisticsService.dashboard())


@dashboard_bp.route('/monthly-summary')
def monthly_summary():
    """Month capital, stats and weekly breakdown (defaults to the current month)"""
    month = request.args.get('month', type=int)
    year = request.args.get('year', type=int)

    period = None
    if month is not None or year is not None:
        if month is None or year is None or not 0 <= month <= 11:
            return failure('Provide both month (0-11) and year')
        period = Period(month, year)

    return success(StatisticsService.monthly_summary(period))
