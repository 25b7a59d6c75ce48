from flask import Blueprint

bets_bp = Blueprint('bets', __name__)

from . import routes  # noqa: E402,F401
