"""
Shared pytest fixtures for the BetPlan Tracker test suite.

All tests run against an in-memory SQLite database (TestingConfig).
A single app context is pushed for the whole session so that SQLAlchemy
objects remain attached throughout.  After each test, clean_db wipes all
rows so tests are fully independent.
"""
from datetime import date

import pytest
from app import create_app
from extensions import db as _db


# A Wednesday in week 2 of April 2025, the default plan start month
TODAY = date(2025, 4, 9)


# ---------------------------------------------------------------------------
# Application / database lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application with an in-memory SQLite database."""
    application = create_app('testing')
    ctx = application.app_context()
    ctx.push()
    _db.create_all()
    yield application
    _db.session.remove()
    _db.drop_all()
    ctx.pop()


@pytest.fixture(autouse=True)
def clean_db(app):
    """Wipe every table after each test so tests never share state."""
    yield
    _db.session.rollback()
    for table in reversed(_db.metadata.sorted_tables):
        _db.session.execute(table.delete())
    _db.session.commit()
    _db.session.expunge_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------------
# Common model helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def capital(app):
    """Default plan: 5000 at 20% a month for 36 months from April 2025."""
    from services.capital_service import CapitalService
    return CapitalService.get_or_initialize()


@pytest.fixture
def make_bet(capital):
    """Create a bet through the service with sensible defaults."""
    from services.bet_service import BetService

    def _make(today=TODAY, **overrides):
        data = {
            'match_name': 'Arsenal vs Chelsea',
            'league': 'Premier League',
            'date': today,
            'odds': '1.8',
            'stake': '250',
            'bet_type': 'Win',
            'result': 'Pending',
        }
        data.update(overrides)
        return BetService.create(data, today=today)

    return _make
