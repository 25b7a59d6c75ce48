from flask import Blueprint

capital_bp = Blueprint('capital', __name__)

from . import routes  # noqa: E402,F401
