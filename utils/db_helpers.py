"""
Database helpers shared by the services.

Usage
-----
Fetch a record or raise ``NotFound``::

    from utils.db_helpers import get_or_raise, unit_of_work

    bet = get_or_raise(Bet, bet_id, 'Bet not found')

Run a multi-record update as one transaction::

    with unit_of_work('create bet'):
        db.session.add(bet)
        CapitalService.apply_profit_delta(period, bet.profit)
        WeeklyPlanService.apply_bet_count_delta(period, bet.week, placed=1, won=1)

On success the session is committed once.  On any failure it is rolled back,
so a bet is never saved without its capital and weekly-plan updates (and vice
versa).  Service errors propagate unchanged; database errors are re-raised as
``CascadeFailure``.
"""
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from services.exceptions import ServiceError, NotFound, CascadeFailure


def get_or_raise(model, record_id, message=None):
    """Return ``model`` row ``record_id`` or raise ``NotFound``."""
    record = db.session.get(model, record_id)
    if record is None:
        raise NotFound(message or f'{model.__name__} not found')
    return record


@contextmanager
def unit_of_work(operation):
    """Commit everything done inside the block, or nothing."""
    try:
        yield db.session
        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception(f'{operation} failed, changes rolled back')
        raise CascadeFailure(f'Failed to {operation}') from exc
    except Exception:
        db.session.rollback()
        current_app.logger.exception(f'{operation} failed, changes rolled back')
        raise
