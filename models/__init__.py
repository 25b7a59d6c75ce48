# Models package - Import all models for Flask-SQLAlchemy

from models.bets import Bet
from models.capital import CapitalState, MonthlyCapital
from models.settings import Settings
from models.weekly_plans import WeeklyPlan

__all__ = [
    'Bet',
    'CapitalState',
    'MonthlyCapital',
    'Settings',
    'WeeklyPlan',
]
