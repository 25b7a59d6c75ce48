"""
Capital Forms
Capital plan edits; percentages are converted to ratios by the routes
"""
from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, DecimalField, IntegerField
from wtforms.validators import InputRequired, NumberRange, Optional, ValidationError


class CapitalForm(FlaskForm):
    initial_capital = DecimalField('Initial Capital', validators=[
        Optional(),
        NumberRange(min=0.01, message='Initial capital must be greater than zero')
    ])
    current_capital = DecimalField('Current Capital', validators=[Optional()])
    monthly_growth_target = DecimalField('Monthly Growth Target (%)', validators=[
        Optional(),
        NumberRange(min=0.01, max=100, message='Growth target must be between 0 and 100%')
    ])


class MonthlyCapitalForm(FlaskForm):
    month = IntegerField('Month', validators=[
        InputRequired(message='Month is required'),
        NumberRange(min=0, max=11, message='Month must be between 0 and 11')
    ])
    year = IntegerField('Year', validators=[InputRequired(message='Year is required')])
    initial_capital = DecimalField('Initial Capital', validators=[
        InputRequired(message='Initial capital is required'),
        NumberRange(min=0.01, message='Initial capital must be greater than zero')
    ])


class ScheduleForm(FlaskForm):
    start_month = IntegerField('Start Month', validators=[
        InputRequired(message='Start month is required'),
        NumberRange(min=0, max=11, message='Month must be between 0 and 11')
    ])
    start_year = IntegerField('Start Year', validators=[
        InputRequired(message='Start year is required'),
        NumberRange(min=2000, max=2100)
    ])
    duration_months = IntegerField('Duration (months)', validators=[
        InputRequired(message='Duration is required'),
        NumberRange(min=1, max=120, message='Duration must be between 1 and 120 months')
    ])


class ResetForm(FlaskForm):
    confirm = StringField('Confirmation', validators=[InputRequired(message='Type the confirmation phrase to reset')])

    def validate_confirm(self, field):
        expected = current_app.config['RESET_CONFIRMATION']
        if field.data.strip() != expected:
            raise ValidationError(f'Type {expected} to confirm the reset')
