"""
Auth Blueprint - Bearer-token authentication
Handles: Login, Logout, current user, admin-only registration
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes
