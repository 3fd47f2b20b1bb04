"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import login_required, admin_required, is_admin_request
from .errors import (
    APIError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    RateLimitError
)
from .notifications import (
    get_telegram_credentials,
    send_telegram_notification,
    notify_new_contact
)
from .security import (
    get_client_ip,
    check_rate_limit,
    is_rate_limited,
    record_request,
    reset_rate_limits,
    log_audit_event,
    hash_password,
    verify_password,
    generate_token,
    decode_token
)
from .helpers import (
    get_pagination_args,
    get_limit_arg,
    get_filter_arg,
    parse_bool_arg,
    parse_payload,
    format_validation_errors,
    apply_fields,
    deep_merge,
    search_filter,
    build_pagination
)

__all__ = [
    # Decorators
    'login_required',
    'admin_required',
    'is_admin_request',

    # Errors
    'APIError',
    'UnauthorizedError',
    'ForbiddenError',
    'NotFoundError',
    'ConflictError',
    'RateLimitError',

    # Notifications
    'get_telegram_credentials',
    'send_telegram_notification',
    'notify_new_contact',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'is_rate_limited',
    'record_request',
    'reset_rate_limits',
    'log_audit_event',
    'hash_password',
    'verify_password',
    'generate_token',
    'decode_token',

    # Helpers
    'get_pagination_args',
    'get_limit_arg',
    'get_filter_arg',
    'parse_bool_arg',
    'parse_payload',
    'format_validation_errors',
    'apply_fields',
    'deep_merge',
    'search_filter',
    'build_pagination'
]
