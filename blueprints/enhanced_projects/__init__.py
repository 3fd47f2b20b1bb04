"""
Enhanced Projects Blueprint - Projects with interactive card and effect settings
"""

from flask import Blueprint

enhanced_projects_bp = Blueprint('enhanced_projects', __name__, url_prefix='/api/enhanced-projects')

from . import routes
