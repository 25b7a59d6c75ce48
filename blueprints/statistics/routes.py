from flask import request
from . import statistics_bp
from services.statistics_service import StatisticsService
from utils.responses import success


@statistics_bp.route('/statistics')
def index():
    """Win rate, ROI and league / bet type breakdowns for the filtered bets"""
    stats = StatisticsService.bet_stats(
        month=request.args.get('month', type=int),
        year=request.args.get('year', type=int),
        week=request.args.get('week', type=int),
        league=request.args.get('league'),
    )
    return success(stats)
