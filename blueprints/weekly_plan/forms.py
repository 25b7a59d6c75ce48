from flask_wtf import FlaskForm
from wtforms import DecimalField, IntegerField
from wtforms.validators import InputRequired, NumberRange, Optional


class WeeklyPlanForm(FlaskForm):
    """Weekly targets; unit size is a percentage of the month's capital"""
    week = IntegerField('Week', validators=[
        Optional(),
        NumberRange(min=1, max=6, message='Week must be between 1 and 6')
    ])
    target_bets = IntegerField('Target Bets', validators=[
        InputRequired(message='Target bets is required'),
        NumberRange(min=1, message='Target at least one bet')
    ])
    average_odds = DecimalField('Average Odds', validators=[
        InputRequired(message='Average odds are required'),
        NumberRange(min=1, message='Odds must be at least 1.0')
    ])
    unit_size = DecimalField('Unit Size (%)', validators=[
        InputRequired(message='Unit size is required'),
        NumberRange(min=0.01, max=100, message='Unit size must be between 0 and 100%')
    ])
