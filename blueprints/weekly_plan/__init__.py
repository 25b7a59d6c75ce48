from flask import Blueprint

weekly_plan_bp = Blueprint('weekly_plan', __name__)

from . import routes  # noqa: E402,F401
