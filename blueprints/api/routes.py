"""
API Routes - Index, health check and generated documentation
"""

from datetime import datetime, timezone

from flask import jsonify, request, current_app
from . import api_bp


API_VERSION = '1.0.0'

API_ENDPOINTS = {
    'projects': '/api/projects',
    'enhancedProjects': '/api/enhanced-projects',
    'uiEffects': '/api/ui-effects',
    'contact': '/api/contact',
    'profile': '/api/profile',
    'auth': '/api/auth',
    'health': '/api/health',
    'docs': '/api/docs',
}

IGNORED_METHODS = {'HEAD', 'OPTIONS'}


def utc_timestamp():
    return datetime.now(timezone.utc).isoformat()


def _describe(view):
    doc = (view.__doc__ or '').strip()
    return doc.splitlines()[0] if doc else ''


def collect_endpoints():
    """
    Build endpoint documentation from the registered URL rules.

    Descriptions come from the first docstring line of each view; auth flags
    are set by the login_required/admin_required decorators.
    """
    endpoints = []
    for rule in current_app.url_map.iter_rules():
        if rule.endpoint == 'static' or not rule.rule.startswith('/api'):
            continue
        view = current_app.view_functions[rule.endpoint]
        for method in sorted((rule.methods or set()) - IGNORED_METHODS):
            endpoints.append({
                'method': method,
                'path': rule.rule,
                'description': _describe(view),
                'authentication': getattr(view, 'auth_required', False),
                'adminOnly': getattr(view, 'admin_required', False),
            })
    endpoints.sort(key=lambda e: (e['path'], e['method']))
    return endpoints


@api_bp.route('/', strict_slashes=False)
def api_info():
    """API information and endpoint map"""
    return jsonify({
        'success': True,
        'message': 'Welcome to the Portfolio API',
        'version': API_VERSION,
        'endpoints': API_ENDPOINTS,
        'documentation': '/api/docs'
    })


@api_bp.route('/health')
def api_health():
    """API health check"""
    return jsonify({
        'success': True,
        'message': 'Portfolio API is running',
        'timestamp': utc_timestamp(),
        'version': API_VERSION
    })


@api_bp.route('/docs')
def api_docs():
    """Documentation generated from the registered routes"""
    endpoints = collect_endpoints()
    return jsonify({
        'success': True,
        'data': {
            'title': 'Portfolio API',
            'version': API_VERSION,
            'baseUrl': f"{request.host_url.rstrip('/')}/api",
            'authentication': 'Bearer token in the Authorization header',
            'endpoints': endpoints,
            'count': len(endpoints)
        }
    })
