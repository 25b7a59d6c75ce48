from flask import current_app, request
from . import weekly_plan_bp
from .forms import WeeklyPlanForm
from extensions import limiter
from services.weekly_plan_service import WeeklyPlanService
from utils.responses import success, form_errors


@weekly_plan_bp.route('/weekly-plan')
def index():
    """Plan and stats for a week of the current month (defaults to this week)"""
    return success(WeeklyPlanService.get_or_default(week=request.args.get('week', type=int)))


@weekly_plan_bp.route('/weekly-plan/all')
def all_plans():
    """Every saved plan of the current month"""
    return success([plan.to_dict() for plan in WeeklyPlanService.list_for_current_month()])


@weekly_plan_bp.route('/weekly-plan', methods=['POST'])
@limiter.limit(lambda: current_app.config['WRITE_RATE_LIMIT'])
def save():
    """Create or update the plan for a week"""
    form = WeeklyPlanForm()
    if not form.validate_on_submit():
        return form_errors(form)

    plan = WeeklyPlanService.create_or_update(
        week=form.week.data,
        target_bets=form.target_bets.data,
        average_odds=form.average_odds.data,
        unit_size=form.unit_size.data,
    )
    return success(plan.to_dict())
