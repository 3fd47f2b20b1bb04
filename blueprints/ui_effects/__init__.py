"""
UI Effects Blueprint - Visual effect configuration for the front end
"""

from flask import Blueprint

ui_effects_bp = Blueprint('ui_effects', __name__, url_prefix='/api/ui-effects')

from . import routes
