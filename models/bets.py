from extensions import db
from datetime import datetime

from utils.money import as_number, round_currency, to_decimal
from utils.periods import Period


BET_TYPES = ('Win', 'Draw', 'Over', 'Under', 'BTTS', 'Other')
BET_RESULTS = ('Win', 'Loss', 'Pending')


class Bet(db.Model):
    """A single wager.

    month/year/week are stamped from the capital plan when the bet is created
    and never recomputed, so later cascades always hit the period the bet was
    placed in.
    """
    __tablename__ = 'bets'

    id = db.Column(db.Integer, primary_key=True)
    match_name = db.Column(db.String(200), nullable=False)
    league = db.Column(db.String(100), nullable=False)
    date = db.Column(db.Date, nullable=False)
    odds = db.Column(db.Numeric(8, 3), nullable=False)
    stake = db.Column(db.Numeric(12, 2), nullable=False)
    bet_type = db.Column(db.String(10), nullable=False)  # Win, Draw, Over, Under, BTTS, Other
    result = db.Column(db.String(10), nullable=False, default='Pending')  # Win, Loss, Pending
    profit = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    notes = db.Column(db.Text)

    # Period stamp (month is 0-indexed)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    week = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_bet_period', 'year', 'month', 'week'),
    )

    @property
    def period(self):
        return Period(self.month, self.year)

    @property
    def is_settled(self):
        return self.result != 'Pending'

    @staticmethod
    def calculate_profit(result, stake, odds):
        """Win pays round(stake × (odds − 1)), Loss costs the stake, Pending is 0."""
        if result == 'Win':
            return round_currency(to_decimal(stake) * (to_decimal(odds) - 1))
        if result == 'Loss':
            return -to_decimal(stake)
        return to_decimal(0)

    def to_dict(self):
        return {
            'id': self.id,
            'match_name': self.match_name,
            'league': self.league,
            'date': self.date.isoformat() if self.date else None,
            'odds': float(self.odds),
            'stake': as_number(self.stake),
            'bet_type': self.bet_type,
            'result': self.result,
            'profit': as_number(self.profit),
            'notes': self.notes,
            'month': self.month,
            'year': self.year,
            'week': self.week,
        }

    def __repr__(self):
        return f'<Bet {self.match_name} @ {self.odds}: {self.result} {self.profit}>'
