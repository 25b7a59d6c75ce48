from flask import current_app
from . import settings_bp
from .forms import SettingsForm
from extensions import limiter
from services.settings_service import SettingsService
from utils.responses import success, form_errors


@settings_bp.route('/settings')
def index():
    """Current preferences"""
    return success(SettingsService.get_or_initialize())


@settings_bp.route('/settings/update', methods=['POST'])
@limiter.limit(lambda: current_app.config['WRITE_RATE_LIMIT'])
def update():
    """Save preferences; a new growth target re-projects the capital schedule"""
    form = SettingsForm()
    if not form.validate_on_submit():
        return form_errors(form)

    settings = SettingsService.update(
        monthly_growth_target=form.monthly_growth_target.data,
        default_unit_size=form.default_unit_size.data,
        theme=form.theme.data,
        notifications=form.notifications(),
    )
    return success(settings)
