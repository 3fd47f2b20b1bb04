"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import jsonify
from flask_login import current_user
from extensions import login_manager


def login_required(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    decorated_function.auth_required = True
    return decorated_function


def admin_required(f):
    """Decorator to require an authenticated admin"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if current_user.role != 'admin':
            return jsonify({'success': False, 'message': 'Admin access required'}), 403
        return f(*args, **kwargs)
    decorated_function.auth_required = True
    decorated_function.admin_required = True
    return decorated_function


def is_admin_request():
    """True when the current request carries an admin token"""
    return current_user.is_authenticated and current_user.role == 'admin'
