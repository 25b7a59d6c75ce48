from extensions import db
from datetime import datetime


class WeeklyPlan(db.Model):
    """Betting targets and running counters for one week of a plan month.

    Counters are only tracked once a plan has been saved for the week.
    bets_placed always equals bets_won + bets_lost + bets_pending.
    """
    __tablename__ = 'weekly_plans'

    id = db.Column(db.Integer, primary_key=True)
    month = db.Column(db.Integer, nullable=False)  # 0-indexed
    year = db.Column(db.Integer, nullable=False)
    week = db.Column(db.Integer, nullable=False)

    target_bets = db.Column(db.Integer, nullable=False, default=5)
    average_odds = db.Column(db.Numeric(6, 2), nullable=False, default=1.8)
    unit_size = db.Column(db.Numeric(6, 4), nullable=False, default=0.05)  # ratio of month capital

    bets_placed = db.Column(db.Integer, nullable=False, default=0)
    bets_won = db.Column(db.Integer, nullable=False, default=0)
    bets_lost = db.Column(db.Integer, nullable=False, default=0)
    bets_pending = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('month', 'year', 'week', name='unique_plan_week'),
    )

    def to_dict(self, persisted=True):
        return {
            'id': self.id,
            'month': self.month,
            'year': self.year,
            'week': self.week,
            'target_bets': self.target_bets,
            'average_odds': float(self.average_odds),
            'unit_size': float(self.unit_size),
            'bets_placed': self.bets_placed,
            'bets_won': self.bets_won,
            'bets_lost': self.bets_lost,
            'bets_pending': self.bets_pending,
            'persisted': persisted,
        }

    def __repr__(self):
        return f'<WeeklyPlan {self.year}-{self.month + 1:02d} week {self.week}: {self.bets_placed}/{self.target_bets}>'
