"""
Helpers Module - Utility functions shared by the API blueprints
"""

import copy

from flask import request
from sqlalchemy import cast, or_

from extensions import db


DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def _int_arg(name, default):
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default


def get_pagination_args(default_limit=DEFAULT_PAGE_LIMIT, max_limit=MAX_PAGE_LIMIT):
    """Read page/limit query args; bad values fall back to the defaults"""
    page = max(_int_arg('page', 1), 1)
    limit = min(max(_int_arg('limit', default_limit), 1), max_limit)
    return page, limit


def get_limit_arg(default, max_limit=MAX_PAGE_LIMIT):
    return min(max(_int_arg('limit', default), 1), max_limit)


def parse_bool_arg(name):
    """'true'/'false' query arg -> bool, missing -> None"""
    value = request.args.get(name)
    if value is None:
        return None
    return value.strip().lower() in ('true', '1', 'yes')


def get_filter_arg(name):
    """Query arg used as an equality filter; '' and 'all' mean no filter"""
    value = (request.args.get(name) or '').strip()
    if not value or value == 'all':
        return None
    return value


def parse_payload(schema, data=None):
    """Validate the JSON body (or given data) against a pydantic schema"""
    if data is None:
        data = request.get_json(silent=True)
    if data is None:
        data = {}
    return schema.model_validate(data)


def format_validation_errors(exc):
    """pydantic ValidationError -> [{field, message}]"""
    errors = []
    for err in exc.errors():
        field = '.'.join(str(part) for part in err.get('loc', ())) or 'body'
        message = err.get('msg', 'Invalid value')
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        errors.append({'field': field, 'message': message})
    return errors


def apply_fields(obj, fields):
    """Copy validated snake_case fields onto a model instance"""
    for key, value in fields.items():
        setattr(obj, key, value)
    return obj


def deep_merge(base, updates):
    """Return a new dict with updates merged recursively into base"""
    merged = copy.deepcopy(base) if base else {}
    for key, value in (updates or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


LIKE_ESCAPE = '\\'
JSON_PUNCTUATION = set('[]{}",:\\')


def like_pattern(term):
    """Substring LIKE pattern with %, _ and the escape character taken literally"""
    for char in (LIKE_ESCAPE, '%', '_'):
        term = term.replace(char, LIKE_ESCAPE + char)
    return f"%{term}%"


def search_filter(model, term):
    """Case-insensitive match on name, description or any technology"""
    pattern = like_pattern(term)
    clauses = [
        model.name.ilike(pattern, escape=LIKE_ESCAPE),
        model.description.ilike(pattern, escape=LIKE_ESCAPE),
    ]
    # Technologies are searched as serialized JSON, so its syntax must not match
    if not JSON_PUNCTUATION.intersection(term):
        clauses.append(cast(model.technologies, db.Text).ilike(pattern, escape=LIKE_ESCAPE))
    return or_(*clauses)


def build_pagination(pagination, total_key):
    """Pagination block in the shape used by the projects and contact lists"""
    return {
        'currentPage': pagination.page,
        'totalPages': pagination.pages,
        total_key: pagination.total,
        'hasNextPage': pagination.has_next,
        'hasPrevPage': pagination.has_prev,
    }
