from flask import current_app, request
from . import bets_bp
from .forms import BetForm, BetEditForm
from extensions import limiter
from services.bet_service import BetService
from utils.responses import success, failure, form_errors


def _write_limit():
    return current_app.config['WRITE_RATE_LIMIT']


@bets_bp.route('/bets')
def index():
    """List bets, newest first"""
    result = BetService.list_bets(
        month=request.args.get('month', type=int),
        year=request.args.get('year', type=int),
        week=request.args.get('week', type=int),
        result=request.args.get('result'),
        league=request.args.get('league'),
        limit=request.args.get('limit', type=int, default=10),
        skip=request.args.get('skip', type=int, default=0),
    )
    return success({
        'bets': [bet.to_dict() for bet in result['bets']],
        'pagination': result['pagination'],
    })


@bets_bp.route('/bets', methods=['POST'])
@limiter.limit(_write_limit)
def create():
    """Record a new bet against the current plan month"""
    form = BetForm()
    if not form.validate_on_submit():
        return form_errors(form)

    bet = BetService.create(form.bet_data())
    return success(bet.to_dict(), 201)


@bets_bp.route('/bets/<int:id>')
def detail(id):
    """Single bet"""
    return success(BetService.get(id).to_dict())


@bets_bp.route('/bets/<int:id>/edit', methods=['POST'])
@limiter.limit(_write_limit)
def edit(id):
    """Edit a bet; capital and weekly counters follow the change"""
    form = BetEditForm()
    if not form.validate_on_submit():
        return form_errors(form)

    changes = form.changes()
    if not changes:
        return failure('No changes submitted')

    bet = BetService.update(id, changes)
    return success(bet.to_dict())


@bets_bp.route('/bets/<int:id>/delete', methods=['POST'])
@limiter.limit(_write_limit)
def delete(id):
    """Delete a bet and reverse its capital and counter contributions"""
    BetService.delete(id)
    return success({'id': id})
