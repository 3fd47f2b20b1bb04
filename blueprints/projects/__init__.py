"""
Projects Blueprint - Portfolio projects
Handles: Public listing, featured projects, admin CRUD
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
