"""
Security Module - Bearer tokens, client identification, rate limiting and audit logging
"""

import re
import time
from datetime import datetime, timedelta, timezone

import jwt
from flask import request, current_app, jsonify
from werkzeug.security import generate_password_hash, check_password_hash

from .errors import RateLimitError


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {(scope, key): [timestamp, ...]}
RATE_LIMIT_MESSAGES = {
    'contact': 'Too many contact form submissions. Please try again in an hour.',
    'auth': 'Too many authentication attempts, please try again later.',
}

_DURATION_RE = re.compile(r'^\s*(\d+)\s*([smhd]?)\s*$')
_DURATION_UNITS = {'': 'seconds', 's': 'seconds', 'm': 'minutes', 'h': 'hours', 'd': 'days'}


def log_audit_event(event_type, username=None, details=''):
    """Log high-level audit events for administrative review"""
    current_app.logger.info(
        f"AUDIT {event_type} user={username or '-'} ip={get_client_ip()} {details}".rstrip())


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def _rate_limit_key(scope):
    if scope == 'contact':
        # IP + User-Agent, so visitors behind a shared NAT are not lumped together
        return f"{get_client_ip()}_{request.headers.get('User-Agent', 'unknown')}"
    return get_client_ip()


def _recent_requests(scope):
    """Timestamps still inside the window; empty buckets are dropped, never created"""
    limit, window = current_app.config['RATE_LIMITS'][scope]
    bucket = (scope, _rate_limit_key(scope))
    current_time = time.time()
    recent = [
        ts for ts in RATE_LIMIT_REQUESTS.get(bucket, [])
        if current_time - ts < window
    ]
    if recent:
        RATE_LIMIT_REQUESTS[bucket] = recent
    else:
        RATE_LIMIT_REQUESTS.pop(bucket, None)
    return bucket, recent, limit


def _prune_expired(current_time):
    """Drop buckets whose newest request has left its scope's window"""
    limits = current_app.config['RATE_LIMITS']
    expired = [
        bucket for bucket, timestamps in RATE_LIMIT_REQUESTS.items()
        if not timestamps or current_time - timestamps[-1] >= limits[bucket[0]][1]
    ]
    for bucket in expired:
        del RATE_LIMIT_REQUESTS[bucket]


def is_rate_limited(scope):
    """Check if the client has exhausted its allowance for a scope"""
    if not current_app.config.get('RATE_LIMIT_ENABLED', True):
        return False
    _, recent, limit = _recent_requests(scope)
    return len(recent) >= limit


def record_request(scope):
    """Count one request against the client's allowance for a scope"""
    if not current_app.config.get('RATE_LIMIT_ENABLED', True):
        return
    _prune_expired(time.time())
    bucket, recent, _ = _recent_requests(scope)
    recent.append(time.time())
    RATE_LIMIT_REQUESTS[bucket] = recent


def check_rate_limit(scope):
    """Record a request and raise RateLimitError once the limit is exceeded"""
    if is_rate_limited(scope):
        current_app.logger.warning(f"Rate limit exceeded for scope '{scope}' from {get_client_ip()}")
        raise RateLimitError(RATE_LIMIT_MESSAGES.get(scope, 'Too many requests, please try again later.'))
    record_request(scope)


def reset_rate_limits():
    RATE_LIMIT_REQUESTS.clear()


def parse_duration(value):
    """Parse '7d', '12h', '30m', '45s' or a plain number of seconds into a timedelta"""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value or ''))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password, password_hash):
    """Verify password against hash"""
    return check_password_hash(password_hash, password)


def generate_token(user):
    """Issue a signed access token for the user"""
    config = current_app.config
    now = datetime.now(timezone.utc)
    payload = {
        'sub': user.id,
        'role': user.role,
        'iat': now,
        'exp': now + parse_duration(config['JWT_EXPIRES_IN']),
        'iss': config['JWT_ISSUER'],
        'aud': config['JWT_AUDIENCE'],
    }
    return jwt.encode(payload, config['JWT_SECRET_KEY'], algorithm='HS256')


def decode_token(token):
    """Verify a token and return its claims; raises jwt.InvalidTokenError"""
    config = current_app.config
    return jwt.decode(
        token,
        config['JWT_SECRET_KEY'],
        algorithms=['HS256'],
        audience=config['JWT_AUDIENCE'],
        issuer=config['JWT_ISSUER'],
    )


def get_bearer_token():
    auth_header = request.headers.get('Authorization', '')
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def load_user_from_request(req):
    """Flask-Login request loader: resolve the Authorization header to a User"""
    from models import User

    token = get_bearer_token()
    if not token:
        return None

    try:
        claims = decode_token(token)
    except jwt.InvalidTokenError as e:
        current_app.logger.info(f"Rejected access token: {str(e)}")
        return None

    user = User.query.filter_by(id=claims.get('sub')).first()
    if not user or not user.is_active:
        return None
    return user


def unauthorized_response():
    """Flask-Login unauthorized handler: JSON 401 instead of a redirect"""
    message = 'Invalid or expired token' if get_bearer_token() else 'Access token required'
    response = jsonify({'success': False, 'message': message})
    response.status_code = 401
    return response


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'is_rate_limited',
    'record_request',
    'reset_rate_limits',
    'log_audit_event',
    'parse_duration',
    'hash_password',
    'verify_password',
    'generate_token',
    'decode_token',
    'get_bearer_token',
    'load_user_from_request',
    'unauthorized_response',
]
