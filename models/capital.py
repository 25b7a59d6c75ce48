from extensions import db
from datetime import datetime

from utils.money import as_number
from utils.periods import Period, month_name


class CapitalState(db.Model):
    """The capital plan: one row per deployment, owning the monthly schedule."""
    __tablename__ = 'capital_state'

    id = db.Column(db.Integer, primary_key=True)
    initial_capital = db.Column(db.Numeric(12, 2), nullable=False, default=5000)
    current_capital = db.Column(db.Numeric(12, 2), nullable=False, default=5000)
    monthly_growth_target = db.Column(db.Numeric(6, 4), nullable=False, default=0.2)  # 0.2 = 20%

    # Month indexes are 0-based (0 = January)
    start_month = db.Column(db.Integer, nullable=False, default=3)
    start_year = db.Column(db.Integer, nullable=False, default=2025)
    current_month = db.Column(db.Integer, nullable=False, default=3)
    current_year = db.Column(db.Integer, nullable=False, default=2025)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    monthly_capital = db.relationship(
        'MonthlyCapital',
        backref='capital',
        order_by=lambda: [MonthlyCapital.year, MonthlyCapital.month],
        cascade='all, delete-orphan',
    )

    @property
    def current_period(self):
        return Period(self.current_month, self.current_year)

    @property
    def start_period(self):
        return Period(self.start_month, self.start_year)

    def find_month(self, month, year):
        """Return (index, entry) for the schedule entry of month/year, or (None, None)."""
        for index, entry in enumerate(self.monthly_capital):
            if entry.month == month and entry.year == year:
                return index, entry
        return None, None

    def to_dict(self):
        return {
            'id': self.id,
            'initial_capital': as_number(self.initial_capital),
            'current_capital': as_number(self.current_capital),
            'monthly_growth_target': float(self.monthly_growth_target),
            'start_month': self.start_month,
            'start_year': self.start_year,
            'current_month': self.current_month,
            'current_year': self.current_year,
            'monthly_capital': [entry.to_dict() for entry in self.monthly_capital],
        }

    def __repr__(self):
        return f'<CapitalState {self.current_period.label}: {self.current_capital}>'


class MonthlyCapital(db.Model):
    """One month of the compound growth schedule."""
    __tablename__ = 'monthly_capital'

    id = db.Column(db.Integer, primary_key=True)
    capital_id = db.Column(db.Integer, db.ForeignKey('capital_state.id'), nullable=False)
    month = db.Column(db.Integer, nullable=False)  # 0-indexed
    year = db.Column(db.Integer, nullable=False)

    initial_capital = db.Column(db.Numeric(12, 2), nullable=False)
    current_capital = db.Column(db.Numeric(12, 2), nullable=False)
    target_capital = db.Column(db.Numeric(12, 2), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('capital_id', 'month', 'year', name='unique_capital_month'),
    )

    @property
    def period(self):
        return Period(self.month, self.year)

    def to_dict(self):
        return {
            'month': self.month,
            'year': self.year,
            'month_name': month_name(self.month),
            'initial_capital': as_number(self.initial_capital),
            'current_capital': as_number(self.current_capital),
            'target_capital': as_number(self.target_capital),
        }

    def __repr__(self):
        return f'<MonthlyCapital {self.year}-{self.month + 1:02d}: {self.current_capital}/{self.target_capital}>'
