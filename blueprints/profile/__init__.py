"""
Profile Blueprint - Portfolio owner profile
Handles: Profile, skills, experience, education, stats, availability
"""

from flask import Blueprint

profile_bp = Blueprint('profile', __name__, url_prefix='/api/profile')

from . import routes
