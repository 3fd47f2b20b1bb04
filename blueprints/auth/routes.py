"""
Auth Routes - Authentication and authorization
"""

from datetime import datetime
from flask import jsonify, current_app
from flask_login import current_user
from sqlalchemy import func, or_
from models import User
from extensions import db
from schemas import LoginRequest, RegisterRequest
from utils.decorators import login_required, admin_required
from utils.errors import APIError, RateLimitError, UnauthorizedError
from utils.helpers import parse_payload
from utils.security import (
    generate_token, verify_password, hash_password,
    is_rate_limited, record_request, log_audit_event, RATE_LIMIT_MESSAGES
)
from . import auth_bp


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange username/email and password for an access token"""
    if is_rate_limited('auth'):
        current_app.logger.warning('Auth rate limit exceeded')
        raise RateLimitError(RATE_LIMIT_MESSAGES['auth'])

    payload = parse_payload(LoginRequest)
    identifier = payload.username

    user = User.query.filter(or_(
        User.username == identifier,
        User.email == identifier.lower()
    )).first()

    if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
        # Only failed attempts count toward the limit
        record_request('auth')
        log_audit_event('failed_login', username=identifier)
        raise UnauthorizedError('Invalid credentials')

    user.last_login = datetime.utcnow()
    db.session.commit()
    log_audit_event('login', username=user.username)

    return jsonify({
        'success': True,
        'message': 'Login successful',
        'data': {
            'user': user.to_dict(),
            'token': generate_token(user)
        }
    })


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Stateless logout; the client discards its token"""
    return jsonify({'success': True, 'message': 'Logged out successfully'})


@auth_bp.route('/me')
@login_required
def me():
    """Current user profile"""
    return jsonify({'success': True, 'data': current_user.to_dict()})


@auth_bp.route('/register', methods=['POST'])
@admin_required
def register():
    """Create a new user account"""
    payload = parse_payload(RegisterRequest)

    existing = User.query.filter(or_(
        func.lower(User.username) == payload.username.lower(),
        User.email == payload.email
    )).first()
    if existing:
        raise APIError('User with this email or username already exists', 400)

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=payload.role
    )
    db.session.add(user)
    db.session.commit()

    current_app.logger.info(f"User {user.username} registered by {current_user.username}")
    log_audit_event('register', username=current_user.username, details=f"new_user={user.username}")

    return jsonify({
        'success': True,
        'message': 'User registered successfully',
        'data': {
            'user': user.to_dict(),
            'token': generate_token(user)
        }
    }), 201
