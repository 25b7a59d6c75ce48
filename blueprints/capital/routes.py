from flask import current_app
from . import capital_bp
from .forms import CapitalForm, MonthlyCapitalForm, ScheduleForm, ResetForm
from extensions import limiter
from services.capital_service import CapitalService
from utils.responses import success, failure, form_errors


def _write_limit():
    return current_app.config['WRITE_RATE_LIMIT']


@capital_bp.route('')
def index():
    """Capital plan with its monthly schedule"""
    return success(CapitalService.get_or_initialize().to_dict())


@capital_bp.route('/projection')
def projection():
    """Compound growth table"""
    return success(CapitalService.projection_table())


@capital_bp.route('/edit', methods=['POST'])
@limiter.limit(_write_limit)
def edit():
    """Update initial/current capital or growth target"""
    form = CapitalForm()
    if not form.validate_on_submit():
        return form_errors(form)

    growth = form.monthly_growth_target.data
    if form.initial_capital.data is None and form.current_capital.data is None and growth is None:
        return failure('No changes submitted')

    capital = CapitalService.edit_capital(
        initial_capital=form.initial_capital.data,
        current_capital=form.current_capital.data,
        monthly_growth_target=growth / 100 if growth is not None else None,
    )
    return success(capital.to_dict())


@capital_bp.route('/month', methods=['POST'])
@limiter.limit(_write_limit)
def edit_month():
    """Override one month's starting capital"""
    form = MonthlyCapitalForm()
    if not form.validate_on_submit():
        return form_errors(form)

    capital = CapitalService.edit_monthly_capital(form.month.data, form.year.data, form.initial_capital.data)
    return success(capital.to_dict())


@capital_bp.route('/schedule', methods=['POST'])
@limiter.limit(_write_limit)
def schedule():
    """Change the plan timeline (discards progress)"""
    form = ScheduleForm()
    if not form.validate_on_submit():
        return form_errors(form)

    capital = CapitalService.update_schedule(form.start_month.data, form.start_year.data, form.duration_months.data)
    return success(capital.to_dict())


@capital_bp.route('/advance', methods=['POST'])
@limiter.limit(_write_limit)
def advance():
    """Move to the next month"""
    return success(CapitalService.advance_month().to_dict())


@capital_bp.route('/revert', methods=['POST'])
@limiter.limit(_write_limit)
def revert():
    """Move back to the previous month"""
    return success(CapitalService.revert_month().to_dict())


@capital_bp.route('/reset', methods=['POST'])
@limiter.limit(_write_limit)
def reset():
    """Re-project the plan from its original start; requires the confirmation phrase"""
    form = ResetForm()
    if not form.validate_on_submit():
        return form_errors(form)

    current_app.logger.warning('Capital reset confirmed')
    return success(CapitalService.reset().to_dict())
