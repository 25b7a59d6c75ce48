"""
Bet Forms
Validation for bet entry and bet edits
"""
from flask_wtf import FlaskForm
from wtforms import StringField, DateField, DecimalField, SelectField, TextAreaField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional

from models.bets import BET_TYPES, BET_RESULTS


class BetForm(FlaskForm):
    """New bet"""
    match_name = StringField('Match', validators=[
        DataRequired(message='Match name is required'),
        Length(max=200)
    ])
    league = StringField('League', validators=[
        DataRequired(message='League is required'),
        Length(max=100)
    ])
    date = DateField('Date', validators=[InputRequired(message='Date is required')])
    odds = DecimalField('Odds', validators=[
        InputRequired(message='Odds are required'),
        NumberRange(min=1, message='Odds must be at least 1.0')
    ])
    stake = DecimalField('Stake', validators=[
        InputRequired(message='Stake is required'),
        NumberRange(min=0.01, message='Stake must be greater than zero')
    ])
    bet_type = SelectField('Bet Type', choices=[(t, t) for t in BET_TYPES])
    result = SelectField('Result', choices=[(r, r) for r in BET_RESULTS], default='Pending')
    notes = TextAreaField('Notes', validators=[Optional()])

    def bet_data(self):
        return {
            'match_name': self.match_name.data.strip(),
            'league': self.league.data.strip(),
            'date': self.date.data,
            'odds': self.odds.data,
            'stake': self.stake.data,
            'bet_type': self.bet_type.data,
            'result': self.result.data,
            'notes': self.notes.data or None,
        }


class BetEditForm(FlaskForm):
    """Partial bet edit: only submitted fields are changed"""
    match_name = StringField('Match', validators=[Optional(), Length(max=200)])
    league = StringField('League', validators=[Optional(), Length(max=100)])
    date = DateField('Date', validators=[Optional()])
    odds = DecimalField('Odds', validators=[
        Optional(),
        NumberRange(min=1, message='Odds must be at least 1.0')
    ])
    stake = DecimalField('Stake', validators=[
        Optional(),
        NumberRange(min=0.01, message='Stake must be greater than zero')
    ])
    bet_type = SelectField('Bet Type', choices=[(t, t) for t in BET_TYPES], validate_choice=False, validators=[Optional()])
    result = SelectField('Result', choices=[(r, r) for r in BET_RESULTS], validate_choice=False, validators=[Optional()])
    notes = TextAreaField('Notes', validators=[Optional()])

    def changes(self):
        """Fields present in the submitted data; an empty notes field clears the notes"""
        changes = {}
        for name, field in self._fields.items():
            if name == 'csrf_token' or not field.raw_data:
                continue
            if name == 'notes':
                changes[name] = (field.data or '').strip() or None
            elif field.raw_data[0] not in ('', None):
                changes[name] = field.data.strip() if isinstance(field.data, str) else field.data
        return changes
